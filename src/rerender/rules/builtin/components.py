"""Component-level optimisation and diagnostic rules."""

import re

from rerender.rules.models import Rule

MEMO_MISSING_LARGE_COMPONENT = Rule(
    id="D001",
    type="memo-missing-large-component",
    title="Missing React.memo on potentially large component",
    why=(
        "Components that render complex DOM structures, large lists, or frequently "
        "receive unstable props (like inline functions/objects) should be wrapped "
        "in `React.memo` to skip unnecessary re-renders when their props have not "
        "changed."
    ),
    fix=(
        "Wrap the component definition in `React.memo(...)` or consider using "
        "`useMemo` if the component uses hooks internally."
    ),
    severity="Medium",
    # Named component using state/effects, exported bare by the same name
    pattern=(
        r"function\s+([A-Z][a-zA-Z0-9]*)\s*\([^)]*\)\s*\{[^}]*?(useState|useEffect)"
        r"[^}]*?\}\s*export\s+default\s+\1\s*;"
    ),
    flags=re.DOTALL,
)

CONSOLE_CALL_IN_COMPONENT = Rule(
    id="E001",
    type="console-call-in-component",
    title="console call left in component code",
    why=(
        "Logging inside a component body or effect runs on every render or effect "
        "pass. It clutters the console and serialising large objects costs time "
        "in hot render paths."
    ),
    fix="Remove the call, or guard it behind a development-only flag.",
    severity="Info",
    pattern=r"console\.(log|debug|info|trace)\s*\(",
)

ALL_COMPONENT_RULES = [MEMO_MISSING_LARGE_COMPONENT, CONSOLE_CALL_IN_COMPONENT]
