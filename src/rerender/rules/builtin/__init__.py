"""Built-in rules — aggregate all categories in catalog order."""

from rerender.rules.builtin.a11y import ALL_A11Y_RULES
from rerender.rules.builtin.components import ALL_COMPONENT_RULES
from rerender.rules.builtin.hooks import ALL_HOOK_RULES
from rerender.rules.builtin.render import ALL_RENDER_RULES
from rerender.rules.models import Rule

# Order is significant: it breaks ties between issues of equal severity and line.
ALL_BUILTIN_RULES: tuple[Rule, ...] = (
    *ALL_HOOK_RULES,
    *ALL_RENDER_RULES,
    *ALL_A11Y_RULES,
    *ALL_COMPONENT_RULES,
)

__all__ = ["ALL_BUILTIN_RULES"]
