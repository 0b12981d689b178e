"""Hook rules — effect/memo dependency arrays and state initialisers."""

from rerender.rules.models import Rule

USE_EFFECT_MISSING_DEPS = Rule(
    id="A001",
    type="useEffect-missing-deps",
    title="Missing dependency array in useEffect",
    why=(
        "This effect runs after every render, potentially causing infinite loops "
        "or performance degradation by re-running unnecessary cleanup and setup "
        "on every state change."
    ),
    fix=(
        "Add an empty dependency array (`[]`) if the effect should only run once, "
        "or include all external variables and functions referenced inside the effect."
    ),
    severity="High",
    # useEffect(() => {...}) closed immediately, i.e. no second argument
    pattern=r"useEffect\s*\(\s*\(\s*\)\s*=>\s*\{[^}]*\}\s*\)",
)

USE_MEMO_MISSING_DEPS = Rule(
    id="A002",
    type="useMemo-missing-deps",
    title="useMemo/useCallback missing dependency array",
    why=(
        "If `useMemo` or `useCallback` is used without a dependency array, it "
        "provides no memoization benefit and may even hurt performance slightly "
        "due to the overhead of the hook call."
    ),
    fix=(
        "Always provide a dependency array (`[]` or `[deps]`). If you do not need "
        "memoization, remove the hook."
    ),
    severity="Medium",
    # Block-bodied arrow, expression-bodied arrow (one level of inner parens),
    # or a bare reference; a comma means a dependency array follows
    pattern=(
        r"(useMemo|useCallback)\s*\(\s*("
        r"\([^)]*\)\s*=>\s*\{[^}]*\}"
        r"|\([^)]*\)\s*=>\s*(?:[^,()]|\([^()]*\))*"
        r"|[^,()]*"
        r")\s*\)"
    ),
)

USE_STATE_INITIALIZER = Rule(
    id="A003",
    type="useState-incorrect-initializer",
    title="useState slow initializer function",
    why=(
        "If `useState` is initialized with a function instead of a simple value, "
        "that function is executed on *every* render, wasting CPU cycles. "
        "Initializer functions should only be used for expensive computations."
    ),
    fix=(
        "If the initializer is expensive, wrap it in an arrow function "
        "(`useState(() => expensiveFunc())`). If it is not expensive, use the "
        "value directly (`useState(simpleValue)`)."
    ),
    severity="Low",
    # useState(identifier); literals and builtin constructors are allow-listed
    pattern=r"useState\(\s*([a-zA-Z_$][a-zA-Z0-9_$]*)\s*\)",
    suppress_if_capture_in="safe_state_initializers",
)

ALL_HOOK_RULES = [
    USE_EFFECT_MISSING_DEPS,
    USE_MEMO_MISSING_DEPS,
    USE_STATE_INITIALIZER,
]
