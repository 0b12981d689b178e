"""Match extractor — turns one rule's pattern into positioned occurrences."""

from __future__ import annotations

from typing import Iterator

from rerender.findings.models import Occurrence
from rerender.rules.models import Rule
from rerender.scanner.context import ContextFacts, fact_is_set


def line_number_at(code: str, offset: int) -> int:
    """1-based line of *offset*: newlines strictly before it, plus one."""
    return code.count("\n", 0, offset) + 1


def iter_occurrences(rule: Rule, code: str) -> Iterator[Occurrence]:
    """Yield every match of *rule* in *code*, left to right.

    The scan cursor lives in this generator, never on the rule, and each call
    starts from offset 0. A zero-width match advances the cursor by one
    character so the scan always terminates.
    """
    pattern = rule.compiled_pattern
    pos = 0
    end = len(code)
    while pos <= end:
        m = pattern.search(code, pos)
        if m is None:
            return

        start = m.start()
        snippet = m.group(0).strip()
        yield Occurrence(
            line_number=line_number_at(code, start),
            snippet=snippet,
            char_start=start,
            char_end=start + len(snippet),
            capture=m.group(1) if pattern.groups else None,
        )

        pos = m.end() if m.end() > start else start + 1


def extract(rule: Rule, code: str, facts: ContextFacts) -> Iterator[Occurrence]:
    """Occurrences of *rule*, or nothing at all when its gating fact is unset."""
    if rule.requires_context_fact is not None and not fact_is_set(
        facts, rule.requires_context_fact
    ):
        return iter(())
    return iter_occurrences(rule, code)
