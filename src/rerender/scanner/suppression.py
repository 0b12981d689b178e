"""Capture allow-list suppression.

A rule with ``suppress_if_capture_in`` names an allow-list. When the text of
the rule's first capture group is a member of that list (exact,
case-sensitive), the occurrence is dropped before it becomes an issue.
Occurrences are only ever accepted or dropped, never altered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from rerender.findings.models import Occurrence
from rerender.rules.models import Rule


def is_suppressed(
    rule: Rule,
    occurrence: Occurrence,
    allowlists: Mapping[str, frozenset[str]],
) -> bool:
    """Return True if *occurrence* should be discarded."""
    if rule.suppress_if_capture_in is None:
        return False
    if occurrence.capture is None:
        return False
    allowed = allowlists.get(rule.suppress_if_capture_in, frozenset())
    return occurrence.capture in allowed


@dataclass(frozen=True)
class SuppressionFilter:
    """Applies the allow-lists of one registry to a stream of occurrences."""

    allowlists: Mapping[str, frozenset[str]]

    def apply(self, rule: Rule, occurrences: Iterable[Occurrence]) -> Iterator[Occurrence]:
        for occ in occurrences:
            if not is_suppressed(rule, occ, self.allowlists):
                yield occ
