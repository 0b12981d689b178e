"""Named allow-lists referenced by ``Rule.suppress_if_capture_in``.

Membership is exact and case-sensitive.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Values that are cheap (or not callable at all) when handed to useState
SAFE_STATE_INITIALIZERS: frozenset[str] = frozenset({
    "Number",
    "String",
    "Boolean",
    "Array",
    "Object",
    "Symbol",
    "BigInt",
    "true",
    "false",
    "null",
    "undefined",
    "NaN",
    "Infinity",
})

BUILTIN_ALLOWLISTS: Mapping[str, frozenset[str]] = MappingProxyType({
    "safe_state_initializers": SAFE_STATE_INITIALIZERS,
})
