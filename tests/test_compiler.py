"""Tests for the compile entry point."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from luming import CompileOptions, CompileResult, compile
from luming.diagnostics import DiagnosticLevel, has_errors
from luming.styles import ResolvedStyle
from luming.templates.runtime import iter_layout_nodes


def test_repeated_template() -> None:
    """One template, two distinct non-terminal nodes with its styles."""
    result = compile("tab: bg blue; rd 8\ntab+tab")

    assert list(result.document.templates) == ["tab"]
    assert result.document.templates["tab"].styles == {
        "background-color": "blue",
        "border-radius": "8px",
    }
    assert [root.id for root in result.roots] == ["tab_1", "tab_2"]
    assert not any(root.terminated for root in result.roots)
    assert result.diagnostics == []


def test_bad_line_reported_and_skipped() -> None:
    """A parse failure is one error on its line and yields no statement."""
    result = compile("tab: bg blue\na[b")

    (diagnostic,) = result.diagnostics
    assert diagnostic.level == DiagnosticLevel.ERROR
    assert diagnostic.line == 2
    assert [s.kind for s in result.document.statements] == ["style"]
    assert result.document.templates["tab"].styles == {"background-color": "blue"}


def test_unknown_root() -> None:
    """An unknown explicit root becomes a terminal node and an error."""
    result = compile("", CompileOptions(root_names=["nonexistent"]))

    (root,) = result.roots
    assert root.terminated
    (diagnostic,) = result.diagnostics
    assert diagnostic.level == DiagnosticLevel.ERROR
    assert "nonexistent" in diagnostic.message
    assert has_errors(result.diagnostics)


def test_diagnostics_in_emission_order() -> None:
    """Parse-time diagnostics come before expansion diagnostics."""
    result = compile("a: ???", CompileOptions(root_names=["missing"]))
    assert [d.level for d in result.diagnostics] == [
        DiagnosticLevel.WARNING,
        DiagnosticLevel.ERROR,
    ]


def test_self_reference_is_finite() -> None:
    """Self-containing templates compile to a finite tree."""
    result = compile("a[a]\nb[c]\nc[b]")
    nodes = [node for scene in result.scenes for node in iter_layout_nodes(scene)]

    assert len(nodes) == 11
    assert sum(node.terminated for node in nodes) == 3
    assert result.diagnostics == []


def test_ids_unique() -> None:
    """Every runtime node id is unique within a compilation."""
    result = compile("main[tabs[tab + tab] / content]\nmain + tab")
    nodes = [node for scene in result.scenes for node in iter_layout_nodes(scene)]
    ids = [node.id for node in nodes]
    assert len(ids) == len(set(ids))


def test_compile_is_repeatable(sample_source: str) -> None:
    """Independent calls on the same source give equal results."""
    first = compile(sample_source)
    second = compile(sample_source)

    assert first == second
    assert first.model_dump() == second.model_dump()


@pytest.mark.parametrize("mode", ["preview", "generate"])
def test_mode_is_forwarded(sample_source: str, mode: str) -> None:
    """The mode tag is copied to the result and changes nothing else."""
    result = compile(sample_source, CompileOptions(mode=mode))
    baseline = compile(sample_source)

    assert result.mode == mode
    assert result.roots == baseline.roots
    assert result.scenes == baseline.scenes


def test_invalid_mode() -> None:
    """Only the known modes are accepted."""
    with pytest.raises(ValidationError):
        CompileOptions(mode="publish")


def test_root_names_ignored_with_structure() -> None:
    """Structural lines take priority over explicit roots."""
    result = compile("header + body", CompileOptions(root_names=["body"]))
    assert [root.template_name for root in result.roots] == ["header", "body"]


def test_styles_only_source() -> None:
    """Without structural lines every template is a root."""
    result = compile("header: bg red\nfooter: 30")
    assert [root.id for root in result.roots] == ["header_1", "footer_2"]
    assert len(result.scenes) == 2


def test_custom_style_resolver() -> None:
    """A resolver passed to compile replaces the default dictionary."""
    result = compile(
        "tab: anything\ntab",
        style_resolver=lambda token: ResolvedStyle(key="data-style", value=token),
    )
    assert result.roots[0].styles == {"data-style": "anything"}


def test_result_round_trips() -> None:
    """A result survives JSON serialization."""
    result = compile("card: bg red\ncard[title + body]")
    restored = CompileResult.model_validate_json(result.model_dump_json())
    assert restored == result


def test_deep_input_reports_instead_of_raising() -> None:
    """Deeply nested lines and long template chains become diagnostics."""
    chain = "\n".join(f"t{i}[t{i + 1}]" for i in range(200))
    source = "(" * 400 + "a" + ")" * 400 + "\n" + chain

    result = compile(source)

    assert has_errors(result.diagnostics)
    assert result.diagnostics[0].line == 1
    assert len(result.scenes) == 200
