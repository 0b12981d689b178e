"""Rule engine — models, registry, built-in rules."""

from rerender.rules.models import Rule, RuleConfigError
from rerender.rules.registry import RuleRegistry, build_registry, default_registry

__all__ = ["Rule", "RuleConfigError", "RuleRegistry", "build_registry", "default_registry"]
