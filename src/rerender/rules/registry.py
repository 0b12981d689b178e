"""Rule registry — ordered catalog of built-in and custom rules.

The registry is filled and filtered once at startup; after ``build_registry``
returns, nothing mutates it. Any malformed rule raises ``RuleConfigError``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

import yaml

from rerender.config.schema import RerenderConfig
from rerender.rules.allowlists import BUILTIN_ALLOWLISTS
from rerender.rules.models import Rule, RuleConfigError, parse_flags

logger = logging.getLogger(__name__)

CUSTOM_RULES_DIRNAME = ".rerender-rules"

_REQUIRED_KEYS = ("id", "type", "title", "why", "fix", "severity", "pattern")


class RuleRegistry:
    """Central, insertion-ordered store for all detection rules."""

    def __init__(
        self, allowlists: Optional[Mapping[str, frozenset[str]]] = None
    ) -> None:
        self._rules: Dict[str, Rule] = {}
        self._disabled: set[str] = set()
        self._allowlists: Dict[str, frozenset[str]] = dict(
            BUILTIN_ALLOWLISTS if allowlists is None else allowlists
        )

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        if rule.id in self._rules:
            raise RuleConfigError(f"Duplicate rule id: {rule.id}")
        if (
            rule.suppress_if_capture_in is not None
            and rule.suppress_if_capture_in not in self._allowlists
        ):
            raise RuleConfigError(
                f"Rule {rule.id}: unknown allow-list {rule.suppress_if_capture_in!r}"
            )
        if rule.requires_context_fact is not None:
            from rerender.scanner.context import CONTEXT_FACTS

            if rule.requires_context_fact not in CONTEXT_FACTS:
                logger.warning(
                    "Rule %s is gated on unknown context fact %r; it will never run",
                    rule.id,
                    rule.requires_context_fact,
                )
        self._rules[rule.id] = rule

    def register_many(self, rules: Iterable[Rule]) -> None:
        for r in rules:
            self.register(r)

    def extend_allowlist(self, name: str, values: Iterable[str]) -> None:
        self._allowlists[name] = self._allowlists.get(name, frozenset()) | frozenset(values)

    # ---- queries ----

    @property
    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    @property
    def allowlists(self) -> Mapping[str, frozenset[str]]:
        return MappingProxyType(self._allowlists)

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def is_enabled(self, rule_id: str) -> bool:
        return rule_id in self._rules and rule_id not in self._disabled

    def enabled_rules(self) -> List[Rule]:
        """Enabled rules in catalog order."""
        return [r for r in self._rules.values() if r.id not in self._disabled]

    def __len__(self) -> int:
        return len(self._rules)

    # ---- config filtering ----

    def apply_config(self, config: RerenderConfig) -> None:
        """Enable / disable rules based on config.rules."""
        enable_list = config.rules.enable
        disable_list = config.rules.disable

        for rule_id in list(enable_list) + list(disable_list):
            if rule_id not in self._rules:
                logger.warning("Config references unknown rule %s", rule_id)

        self._disabled = {
            rule_id
            for rule_id in self._rules
            if (enable_list and rule_id not in enable_list) or rule_id in disable_list
        }

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise RuleConfigError(f"Failed to read rules from {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            self.register(rule_from_mapping(entry, source=str(path)))
            count += 1
        logger.info("Loaded %d custom rule(s) from %s", count, path)
        return count


def rule_from_mapping(entry: object, source: str = "<mapping>") -> Rule:
    """Build a Rule from a decoded YAML mapping."""
    if not isinstance(entry, dict):
        raise RuleConfigError(f"{source}: rule entry must be a mapping")
    missing = [k for k in _REQUIRED_KEYS if k not in entry]
    if missing:
        raise RuleConfigError(
            f"{source}: rule {entry.get('id', '<unnamed>')} is missing {', '.join(missing)}"
        )
    return Rule(
        id=str(entry["id"]),
        type=entry["type"],
        title=entry["title"],
        why=entry["why"],
        fix=entry["fix"],
        severity=entry["severity"],
        pattern=entry["pattern"],
        flags=parse_flags(entry.get("flags")),
        requires_context_fact=entry.get("requires_context_fact"),
        suppress_if_capture_in=entry.get("suppress_if_capture_in"),
    )


def build_registry(config: RerenderConfig, root: Path) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry."""
    from rerender.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    # Extend allow-lists first so custom rules may reference config-only lists
    for name, values in config.allowlist.items():
        registry.extend_allowlist(name, values)

    registry.register_many(ALL_BUILTIN_RULES)
    registry.load_custom_rules(root / CUSTOM_RULES_DIRNAME)
    registry.apply_config(config)
    return registry


@lru_cache(maxsize=1)
def default_registry() -> RuleRegistry:
    """Built-in catalog with no config applied, built once per process."""
    from rerender.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    registry.register_many(ALL_BUILTIN_RULES)
    return registry
