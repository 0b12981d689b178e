"""Issue construction and ranking.

There is no deduplication: two rules matching the same span yield two issues.
"""

from __future__ import annotations

from typing import Iterable, List

from rerender.config.schema import severity_rank
from rerender.findings.models import Issue, Occurrence
from rerender.rules.models import Rule


def to_issue(rule: Rule, occurrence: Occurrence) -> Issue:
    return Issue(
        id=rule.id,
        type=rule.type,
        title=rule.title,
        why=rule.why,
        fix=rule.fix,
        severity=rule.severity,
        occurrence=occurrence,
    )


def rank(issues: Iterable[Issue]) -> List[Issue]:
    """Sort by severity (High first), then line number.

    ``sorted`` is stable, so ties keep catalog-then-scan order.
    """
    return sorted(
        issues,
        key=lambda i: (-severity_rank(i.severity), i.occurrence.line_number),
    )
