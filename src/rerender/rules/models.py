"""Rule data model — pattern stored as string, compiled when the rule is built."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from rerender.config.schema import SEVERITIES

# Flag names accepted in custom rule files
FLAG_NAMES: dict[str, re.RegexFlag] = {
    "IGNORECASE": re.IGNORECASE,
    "DOTALL": re.DOTALL,
    "MULTILINE": re.MULTILINE,
    "VERBOSE": re.VERBOSE,
}


class RuleConfigError(Exception):
    """Raised when a rule definition is malformed. Fatal at startup."""


@dataclass(frozen=True)
class Rule:
    """A single detection heuristic.

    Rules are plain immutable records; the engine interprets the optional
    ``requires_context_fact`` and ``suppress_if_capture_in`` fields uniformly.
    ``pattern`` is kept as a raw string so the rule stays serialisable; the
    compiled regex is built once in ``__post_init__``. Compiled patterns carry
    no scan position, so sharing a rule between concurrent calls is safe.
    """

    id: str
    type: str
    title: str
    why: str
    fix: str
    severity: str  # High | Medium | Low | Info
    pattern: str
    flags: int = 0
    requires_context_fact: Optional[str] = None
    suppress_if_capture_in: Optional[str] = None  # name of an allow-list

    compiled_pattern: re.Pattern[str] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for name in ("id", "type", "title", "why", "fix", "pattern"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise RuleConfigError(
                    f"Rule {self.id or '<unnamed>'!s}: missing required field {name!r}"
                )
        if self.severity not in SEVERITIES:
            raise RuleConfigError(
                f"Rule {self.id}: invalid severity {self.severity!r} "
                f"(expected one of {', '.join(SEVERITIES)})"
            )
        try:
            compiled = re.compile(self.pattern, self.flags)
        except re.error as exc:
            raise RuleConfigError(f"Rule {self.id}: pattern does not compile: {exc}") from exc
        if self.suppress_if_capture_in is not None and compiled.groups == 0:
            raise RuleConfigError(
                f"Rule {self.id}: suppress_if_capture_in requires a capture group"
            )
        object.__setattr__(self, "compiled_pattern", compiled)

    @property
    def is_gated(self) -> bool:
        return self.requires_context_fact is not None

    @property
    def has_capture(self) -> bool:
        return self.compiled_pattern.groups > 0


def parse_flags(names: Optional[Iterable[str]]) -> int:
    """Turn a list of flag names (``["IGNORECASE", "DOTALL"]``) into re flags."""
    flags = 0
    for name in names or ():
        try:
            flags |= FLAG_NAMES[name.upper()]
        except KeyError:
            raise RuleConfigError(f"Unknown regex flag: {name!r}") from None
    return flags
