"""Context detector — whole-input facts used to gate rules.

Every fact is one independent boolean test against the full input, computed
before any rule runs. Adding a fact means adding an entry to
``CONTEXT_FACTS``; rules that do not name it are unaffected.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Callable, Mapping

ContextFacts = Mapping[str, bool]

HAS_MEMO_WRAPPER = "has_memo_wrapper"

_MEMO_CALL_RE = re.compile(r"\b(?:React\.)?memo\s*\(")


def _has_memo_wrapper(code: str) -> bool:
    return _MEMO_CALL_RE.search(code) is not None


CONTEXT_FACTS: Mapping[str, Callable[[str], bool]] = MappingProxyType({
    HAS_MEMO_WRAPPER: _has_memo_wrapper,
})


def detect_context(code: str) -> ContextFacts:
    """Compute every registered fact for *code*. The result is read-only."""
    return MappingProxyType({name: test(code) for name, test in CONTEXT_FACTS.items()})


def fact_is_set(facts: ContextFacts, name: str) -> bool:
    """Missing facts count as false."""
    return bool(facts.get(name, False))
