"""Tests for rule models, registry, and the built-in catalog."""

import logging
import re

import pytest
import yaml

from rerender.config.schema import RerenderConfig, RulesConfig
from rerender.rules.allowlists import BUILTIN_ALLOWLISTS
from rerender.rules.builtin import ALL_BUILTIN_RULES
from rerender.rules.models import RuleConfigError, parse_flags
from rerender.rules.registry import (
    RuleRegistry,
    build_registry,
    default_registry,
    rule_from_mapping,
)


class TestRuleModel:
    def test_pattern_compiled_once(self, make_rule):
        rule = make_rule(pattern=r"use[A-Z]\w+")
        assert rule.compiled_pattern is rule.compiled_pattern
        assert rule.compiled_pattern.search("useEffect")

    def test_flags_applied(self, make_rule):
        rule = make_rule(pattern=r"<img", flags=re.IGNORECASE)
        assert rule.compiled_pattern.search("<IMG src='x'>")

    def test_rule_is_immutable(self, make_rule):
        rule = make_rule()
        with pytest.raises(AttributeError):
            rule.severity = "High"  # type: ignore[misc]

    def test_gated_and_capture_properties(self, make_rule):
        rule = make_rule(pattern=r"(a)b", requires_context_fact="has_memo_wrapper")
        assert rule.is_gated is True
        assert rule.has_capture is True
        assert make_rule().is_gated is False
        assert make_rule().has_capture is False

    @pytest.mark.parametrize("field", ["id", "type", "title", "why", "fix", "pattern"])
    def test_empty_required_field_rejected(self, field, make_rule):
        with pytest.raises(RuleConfigError, match=field):
            make_rule(**{field: "  "})

    def test_invalid_severity_rejected(self, make_rule):
        with pytest.raises(RuleConfigError, match="severity"):
            make_rule(severity="Critical")

    def test_uncompilable_pattern_rejected(self, make_rule):
        with pytest.raises(RuleConfigError, match="does not compile"):
            make_rule(pattern=r"useState(")

    def test_suppression_needs_capture_group(self, make_rule):
        with pytest.raises(RuleConfigError, match="capture group"):
            make_rule(pattern=r"useState", suppress_if_capture_in="safe_state_initializers")

    def test_parse_flags(self):
        assert parse_flags(["IGNORECASE", "dotall"]) == re.IGNORECASE | re.DOTALL
        assert parse_flags(None) == 0
        with pytest.raises(RuleConfigError):
            parse_flags(["UNICODE_PLEASE"])


class TestRuleRegistry:
    def test_register_and_query(self, make_rule):
        reg = RuleRegistry()
        rule = make_rule(id="R1")
        reg.register(rule)
        assert reg.get("R1") is rule
        assert len(reg) == 1

    def test_duplicate_id_is_fatal(self, make_rule):
        reg = RuleRegistry()
        reg.register(make_rule(id="R1"))
        with pytest.raises(RuleConfigError, match="Duplicate"):
            reg.register(make_rule(id="R1", title="Another"))

    def test_unknown_allowlist_is_fatal(self, make_rule):
        reg = RuleRegistry()
        with pytest.raises(RuleConfigError, match="allow-list"):
            reg.register(make_rule(pattern=r"(x)", suppress_if_capture_in="no_such_list"))

    def test_unknown_fact_warns_but_registers(self, caplog, make_rule):
        reg = RuleRegistry()
        with caplog.at_level(logging.WARNING, logger="rerender.rules.registry"):
            reg.register(make_rule(requires_context_fact="has_portal"))
        assert reg.get("T001") is not None
        assert "has_portal" in caplog.text

    def test_order_is_preserved(self, make_rule):
        reg = RuleRegistry()
        reg.register_many([make_rule(id=i) for i in ("Z9", "A1", "M5")])
        assert [r.id for r in reg.enabled_rules()] == ["Z9", "A1", "M5"]

    def test_disable_list(self, make_rule):
        reg = RuleRegistry()
        reg.register_many([make_rule(id="R1"), make_rule(id="R2")])

        cfg = RerenderConfig()
        cfg.rules = RulesConfig(enable=[], disable=["R2"])
        reg.apply_config(cfg)

        assert [r.id for r in reg.enabled_rules()] == ["R1"]
        assert reg.is_enabled("R2") is False
        assert len(reg.all_rules) == 2

    def test_enable_list_restricts(self, make_rule):
        reg = RuleRegistry()
        reg.register_many([make_rule(id="R1"), make_rule(id="R2"), make_rule(id="R3")])

        cfg = RerenderConfig()
        cfg.rules = RulesConfig(enable=["R3", "R1"], disable=["R1"])
        reg.apply_config(cfg)

        assert [r.id for r in reg.enabled_rules()] == ["R3"]

    def test_extend_allowlist(self):
        reg = RuleRegistry()
        reg.extend_allowlist("safe_state_initializers", ["useSeed"])
        assert "useSeed" in reg.allowlists["safe_state_initializers"]
        assert "Number" in reg.allowlists["safe_state_initializers"]
        # Built-in list object is untouched
        assert "useSeed" not in BUILTIN_ALLOWLISTS["safe_state_initializers"]

    def test_allowlists_view_is_read_only(self):
        reg = RuleRegistry()
        with pytest.raises(TypeError):
            reg.allowlists["other"] = frozenset()  # type: ignore[index]


class TestCustomRules:
    def _write(self, tmp_path, entries, name="custom.yaml"):
        rules_dir = tmp_path / ".rerender-rules"
        rules_dir.mkdir(exist_ok=True)
        (rules_dir / name).write_text(yaml.safe_dump(entries))
        return rules_dir

    def test_load_custom_yaml_rules(self, tmp_path):
        rules_dir = self._write(tmp_path, [{
            "id": "X001",
            "type": "no-find-dom-node",
            "title": "findDOMNode is deprecated",
            "why": "It breaks abstraction and is removed in strict mode.",
            "fix": "Use a ref.",
            "severity": "Low",
            "pattern": r"findDOMNode\s*\(",
            "flags": ["IGNORECASE"],
        }])

        reg = RuleRegistry()
        count = reg.load_custom_rules(rules_dir)
        assert count == 1
        rule = reg.get("X001")
        assert rule is not None
        assert rule.compiled_pattern.search("ReactDOM.FINDDOMNODE(this)")

    def test_missing_directory_loads_nothing(self, tmp_path):
        assert RuleRegistry().load_custom_rules(tmp_path / "absent") == 0

    def test_missing_key_is_fatal(self, tmp_path):
        rules_dir = self._write(tmp_path, [{"id": "X002", "pattern": "x"}])
        with pytest.raises(RuleConfigError, match="missing"):
            RuleRegistry().load_custom_rules(rules_dir)

    def test_malformed_yaml_is_fatal(self, tmp_path):
        rules_dir = tmp_path / ".rerender-rules"
        rules_dir.mkdir()
        (rules_dir / "broken.yml").write_text("- id: [unclosed\n")
        with pytest.raises(RuleConfigError):
            RuleRegistry().load_custom_rules(rules_dir)

    def test_non_mapping_entry_is_fatal(self):
        with pytest.raises(RuleConfigError, match="mapping"):
            rule_from_mapping("just a string")

    def test_custom_rule_cannot_reuse_builtin_id(self, tmp_path):
        self._write(tmp_path, [{
            "id": "A001", "type": "t", "title": "t", "why": "w", "fix": "f",
            "severity": "High", "pattern": "x",
        }])
        with pytest.raises(RuleConfigError, match="Duplicate"):
            build_registry(RerenderConfig(), tmp_path)

    def test_custom_rules_follow_builtins(self, tmp_path):
        self._write(tmp_path, [{
            "id": "X003", "type": "t", "title": "t", "why": "w", "fix": "f",
            "severity": "Info", "pattern": "x",
        }])
        reg = build_registry(RerenderConfig(), tmp_path)
        assert reg.all_rules[-1].id == "X003"
        assert len(reg) == len(ALL_BUILTIN_RULES) + 1


class TestBuildRegistry:
    def test_builtins_registered_in_catalog_order(self, tmp_path):
        reg = build_registry(RerenderConfig(), tmp_path)
        assert [r.id for r in reg.enabled_rules()] == [r.id for r in ALL_BUILTIN_RULES]

    def test_config_allowlist_extension(self, tmp_path):
        cfg = RerenderConfig(allowlist={"safe_state_initializers": ["useInitialCount"]})
        reg = build_registry(cfg, tmp_path)
        assert "useInitialCount" in reg.allowlists["safe_state_initializers"]

    def test_default_registry_is_shared(self):
        assert default_registry() is default_registry()
        assert len(default_registry()) == len(ALL_BUILTIN_RULES)


class TestBuiltinRules:
    """Verify each built-in rule has valid metadata and the catalog is well-formed."""

    def test_catalog_order(self):
        assert [r.id for r in ALL_BUILTIN_RULES] == [
            "A001", "A002", "A003",
            "B001", "B002", "B003", "B004",
            "C001", "C002",
            "D001",
            "E001",
        ]

    def test_ids_and_types_unique(self):
        ids = [r.id for r in ALL_BUILTIN_RULES]
        types = [r.type for r in ALL_BUILTIN_RULES]
        assert len(ids) == len(set(ids))
        assert len(types) == len(set(types))

    @pytest.mark.parametrize("rule", ALL_BUILTIN_RULES, ids=lambda r: r.id)
    def test_rule_has_required_fields(self, rule):
        assert rule.title and rule.why and rule.fix
        assert rule.severity in ("High", "Medium", "Low", "Info")

    def test_only_b004_is_gated(self):
        gated = [r.id for r in ALL_BUILTIN_RULES if r.is_gated]
        assert gated == ["B004"]

    def test_use_effect_without_deps(self):
        from rerender.rules.builtin.hooks import USE_EFFECT_MISSING_DEPS
        p = USE_EFFECT_MISSING_DEPS.compiled_pattern
        assert p.search("useEffect(() => { subscribe(); })")
        assert not p.search("useEffect(() => { subscribe(); }, [])")
        assert not p.search("useEffect(() => { subscribe(); }, [id])")

    def test_memo_hooks_without_deps(self):
        from rerender.rules.builtin.hooks import USE_MEMO_MISSING_DEPS
        p = USE_MEMO_MISSING_DEPS.compiled_pattern
        m = p.search("const cb = useCallback(() => { go(); });")
        assert m is not None and m.group(1) == "useCallback"
        assert p.search("const v = useMemo(computeTotals)")
        assert not p.search("const cb = useCallback(() => { go(); }, []);")
        assert not p.search("const v = useMemo(() => total(a, b), [a, b]);")

    @pytest.mark.parametrize("code", [
        "const total = useMemo(() => a + b);",
        "const onSave = useCallback(() => save(id));",
        "const label = useMemo(() => format(first, last));",
    ])
    def test_memo_hooks_expression_body_without_deps(self, code):
        from rerender.rules.builtin.hooks import USE_MEMO_MISSING_DEPS
        m = USE_MEMO_MISSING_DEPS.compiled_pattern.search(code)
        assert m is not None
        assert m.group(0).endswith(")")

    @pytest.mark.parametrize("code", [
        "const total = useMemo(() => a + b, [a, b]);",
        "const onSave = useCallback(() => save(id), [id]);",
        "const toggle = useCallback(() => setOpen((o) => !o), []);",
    ])
    def test_memo_hooks_expression_body_with_deps(self, code):
        from rerender.rules.builtin.hooks import USE_MEMO_MISSING_DEPS
        assert not USE_MEMO_MISSING_DEPS.compiled_pattern.search(code)

    def test_use_state_captures_initializer(self):
        from rerender.rules.builtin.hooks import USE_STATE_INITIALIZER
        p = USE_STATE_INITIALIZER.compiled_pattern
        assert p.search("useState( loadPrefs )").group(1) == "loadPrefs"
        assert not p.search("useState(0)")
        assert not p.search("useState(() => loadPrefs())")

    def test_inline_object_and_array_props(self):
        from rerender.rules.builtin.render import JSX_INLINE_OBJECT_LITERAL
        p = JSX_INLINE_OBJECT_LITERAL.compiled_pattern
        assert p.search("<Box style={{ margin: 4 }} />")
        assert p.search("<Select options={[1, 2, 3]} />")
        assert not p.search("<Box style={boxStyle} />")

    def test_index_key(self):
        from rerender.rules.builtin.render import JSX_ARRAY_INDEX_KEY
        p = JSX_ARRAY_INDEX_KEY.compiled_pattern
        assert p.search("<li key={index}>")
        assert p.search("<li key = { i }>")
        assert not p.search("<li key={item.id}>")

    def test_img_without_alt(self):
        from rerender.rules.builtin.a11y import A11Y_MISSING_ALT
        p = A11Y_MISSING_ALT.compiled_pattern
        assert p.search('<img src="a.png" />')
        assert p.search('<IMG src="a.png" />')
        assert not p.search('<img src="a.png" alt="Logo" />')

    def test_form_control_without_label(self):
        from rerender.rules.builtin.a11y import A11Y_MISSING_LABEL
        p = A11Y_MISSING_LABEL.compiled_pattern
        assert p.search('<input type="text" />')
        assert p.search("<textarea rows={3} />")
        assert not p.search('<input id="email" type="email" />')
        assert not p.search('<select aria-label="Country" />')

    def test_console_call(self):
        from rerender.rules.builtin.components import CONSOLE_CALL_IN_COMPONENT
        p = CONSOLE_CALL_IN_COMPONENT.compiled_pattern
        assert p.search("console.log(props)")
        assert not p.search("console.error(err)")
