"""Shared test fixtures — sample component sources and rule factories."""

from __future__ import annotations

import textwrap

import pytest

from rerender.rules.models import Rule


def _make_rule(**overrides) -> Rule:
    fields = dict(
        id="T001",
        type="test-rule",
        title="Test rule",
        why="Because tests.",
        fix="Fix it.",
        severity="Medium",
        pattern=r"needle",
    )
    fields.update(overrides)
    return Rule(**fields)


@pytest.fixture
def make_rule():
    """Factory for valid rules; keyword arguments override any field."""
    return _make_rule


@pytest.fixture
def demo_one_liner() -> str:
    """Single-line component with an effect, an inline handler, and an inline object."""
    return (
        "function Demo({ value }) { useEffect(() => { console.log(value); }); "
        'return <Child onClick={() => console.log("click")} config={{ mode: "dark" }} />; }'
    )


@pytest.fixture
def todo_list_component() -> str:
    """A component tripping most hook, render, and a11y rules."""
    return textwrap.dedent("""\
        import React, { useState, useEffect, useCallback } from "react";

        function TodoList({ items, onSelect }) {
          const [filter, setFilter] = useState(getInitialFilter);
          const [count, setCount] = useState(Number);
          useEffect(() => { document.title = filter; });
          const handle = useCallback(() => { onSelect(filter); });
          return (
            <div>
              <img src="/logo.png" />
              <input type="text" onChange={(e) => setFilter(e.target.value)} />
              <ul style={{ padding: 0 }}>
                {items.map((item, index) => <li key={index}>{item.name}</li>)}
              </ul>
            </div>
          );
        }
    """)


@pytest.fixture
def memo_component() -> str:
    """A file that wraps a child in memo() and passes it an inline callback."""
    return textwrap.dedent("""\
        import React, { memo } from "react";

        const Row = memo(function Row({ label, onPick }) {
          return <li>{label}</li>;
        });

        export function Table({ rows }) {
          return rows.map((r) => <Row key={r.id} label={r.label} onPick={() => pick(r.id)} />);
        }
    """)


@pytest.fixture
def unmemoized_counter() -> str:
    """A stateful component exported without React.memo."""
    return textwrap.dedent("""\
        import { useState } from "react";

        function Counter() {
          const [n, setN] = useState(0);
          return <span>count</span>;
        }

        export default Counter;
    """)


@pytest.fixture
def clean_component() -> str:
    """A component none of the built-in rules should flag."""
    return textwrap.dedent("""\
        import { useCallback, useState } from "react";

        export function Greeting({ name }) {
          const [open, setOpen] = useState(false);
          const toggle = useCallback(() => setOpen((o) => !o), []);
          return (
            <section>
              <img src="/avatar.png" alt="" />
              <button onClick={toggle}>Hello, {name}</button>
            </section>
          );
        }
    """)
