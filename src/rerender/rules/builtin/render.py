"""Render-stability rules — unstable props and list keys."""

from rerender.rules.models import Rule
from rerender.scanner.context import HAS_MEMO_WRAPPER

JSX_INLINE_ARROW_FUNCTION = Rule(
    id="B001",
    type="jsx-inline-arrow-function",
    title="Inline arrow function in JSX prop (Anonymous functions)",
    why=(
        "A new function instance is created on every render, which prevents "
        "memoized child components (like `React.memo`) from optimizing rendering, "
        "leading to unnecessary re-renders."
    ),
    fix=(
        "Define the function outside the component or use the `useCallback` hook "
        "to memoize the function reference."
    ),
    severity="Medium",
    pattern=r"(on[A-Z][^=]*|value|onChange|onClick)=\s*\{\s*\([^)]*\)\s*=>\s*[^}]*\}",
)

JSX_INLINE_OBJECT_LITERAL = Rule(
    id="B002",
    type="jsx-inline-object-literal",
    title="Inline object/array literal in JSX prop",
    why=(
        "A new object or array instance is created on every render. Even if the "
        "content is the same, the reference changes, forcing unnecessary "
        "re-renders in memoized child components."
    ),
    fix=(
        "Define the object/array outside the component or use the `useMemo` hook "
        "to memoize the reference."
    ),
    severity="Medium",
    pattern=(
        r"(data|style|options|items|config|user|settings)=\s*\{\s*"
        r"(\{[^}]*\}|\[[^\]]*\])\s*\}"
    ),
)

JSX_ARRAY_INDEX_KEY = Rule(
    id="B003",
    type="jsx-array-index-key",
    title="Using array index as key in list rendering",
    why=(
        "Using the array index as the `key` prop can cause incorrect behavior and "
        "performance issues when the list items are reordered, filtered, or "
        "added/removed. React cannot efficiently track the element identities."
    ),
    fix=(
        "Use a unique, stable ID from the data itself (e.g., `item.id`). If no "
        "stable ID exists, you may need to generate one."
    ),
    severity="High",
    pattern=r"key\s*=\s*\{\s*(index|i)\s*\}",
)

# Higher-confidence tier of B001: only evaluated when the file wraps
# something in memo(), where an unstable callback defeats the memoization.
# Both rules report the same span.
MEMO_CHILD_INLINE_FUNCTION = Rule(
    id="B004",
    type="memo-child-inline-function",
    title="Inline function passed as prop in a file using React.memo",
    why=(
        "This file relies on `React.memo`, which skips re-renders only when every "
        "prop is referentially equal. An inline function is a new reference on "
        "each render, so the memoized child re-renders anyway."
    ),
    fix=(
        "Wrap the handler in `useCallback` with the correct dependencies, or hoist "
        "it out of the component if it does not close over props or state."
    ),
    severity="High",
    pattern=r"(on[A-Z][A-Za-z0-9]*)=\s*\{\s*\([^)]*\)\s*=>\s*[^}]*\}",
    requires_context_fact=HAS_MEMO_WRAPPER,
)

ALL_RENDER_RULES = [
    JSX_INLINE_ARROW_FUNCTION,
    JSX_INLINE_OBJECT_LITERAL,
    JSX_ARRAY_INDEX_KEY,
    MEMO_CHILD_INLINE_FUNCTION,
]
