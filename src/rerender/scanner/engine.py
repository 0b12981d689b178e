"""Core analysis engine — one stateless pass over one fragment of text.

``analyze`` is a pure function of (input, registry): all per-call state
(context facts, scan cursors, issues) is local to the call, so concurrent
calls never interfere.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from rerender.findings.aggregator import rank, to_issue
from rerender.findings.models import Issue, Report, ReportStatus, utc_timestamp
from rerender.rules.registry import RuleRegistry, default_registry
from rerender.scanner.context import detect_context
from rerender.scanner.extractor import extract
from rerender.scanner.suppression import SuppressionFilter

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid or missing code provided."


def analyze(code: Any, registry: Optional[RuleRegistry] = None) -> Report:
    """Analyze *code* and return a ranked Report.

    Non-string input (including None) yields an ``Error`` report with no
    issues; this function never raises for bad input. Empty or
    whitespace-only strings are valid and come back ``Clean``.
    """
    if not isinstance(code, str):
        logger.debug("Rejected input of type %s", type(code).__name__)
        return Report.failure(INVALID_INPUT_MESSAGE)

    if registry is None:
        registry = default_registry()

    facts = detect_context(code)
    suppression = SuppressionFilter(registry.allowlists)

    rules = registry.enabled_rules()
    issues: List[Issue] = []
    for rule in rules:
        occurrences = suppression.apply(rule, extract(rule, code, facts))
        issues.extend(to_issue(rule, occ) for occ in occurrences)

    ranked = rank(issues)
    logger.debug(
        "Analyzed %d chars with %d rules: %d issue(s), facts=%s",
        len(code),
        len(rules),
        len(ranked),
        dict(facts),
    )

    return Report(
        timestamp=utc_timestamp(),
        status=ReportStatus.ISSUES_FOUND if ranked else ReportStatus.CLEAN,
        total_issues=len(ranked),
        issues=ranked,
    )
