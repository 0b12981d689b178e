"""Accessibility rules for JSX elements."""

import re

from rerender.rules.models import Rule

A11Y_MISSING_ALT = Rule(
    id="C001",
    type="a11y-missing-alt",
    title="Image element missing `alt` prop",
    why=(
        "The `alt` prop is essential for screen readers to describe the image "
        "content to visually impaired users. Missing it severely impacts "
        "accessibility."
    ),
    fix=(
        "Add the `alt` prop with a meaningful description of the image content. "
        'Use `alt=""` for purely decorative images.'
    ),
    severity="High",
    # <img ...> with no alt= anywhere on the rest of the line
    pattern=r"<img\s+(?!.*alt=)",
    flags=re.IGNORECASE,
)

A11Y_MISSING_LABEL = Rule(
    id="C002",
    type="a11y-missing-label",
    title="Form control missing label",
    why=(
        "Form elements like `<input>`, `<textarea>`, and `<select>` must be "
        "associated with a label for accessibility. Users relying on assistive "
        "technology may not be able to interact with the control."
    ),
    fix='Use the standard `<label htmlFor="...">` element or use the `aria-label` attribute.',
    severity="Medium",
    pattern=r"<(input|textarea|select)\s+(?!.*(id=|aria-label=|aria-labelledby=))",
    flags=re.IGNORECASE,
)

ALL_A11Y_RULES = [A11Y_MISSING_ALT, A11Y_MISSING_LABEL]
