"""Tests for inline style extraction."""

from __future__ import annotations

import pytest

from luming.document.processor import extract_inline_styles, split_style_body


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("bg blue; rd 8", ["bg blue", "rd 8"]),
        ("  70  ", ["70"]),
        ("a;;b; ", ["a", "b"]),
        ("", []),
    ],
)
def test_split_style_body(body: str, expected: list[str]) -> None:
    """Bodies are split on semicolons and trimmed."""
    assert split_style_body(body) == expected


def test_no_anchor() -> None:
    """Lines without anchors are returned unchanged."""
    remainder, styles = extract_inline_styles("header + body")
    assert remainder == "header + body"
    assert styles == []


def test_anchor_runs_to_next_delimiter() -> None:
    """An anchor's body stops at the next structural delimiter."""
    remainder, styles = extract_inline_styles("header + tab: bg red; rd 4 / body")

    assert remainder == "header + tab/ body"
    (style,) = styles
    assert style.entity == "tab"
    assert style.tokens == ["bg red", "rd 4"]


def test_anchor_inside_brackets() -> None:
    """Anchors inside container content stop at the closing bracket."""
    remainder, styles = extract_inline_styles("card[title: bg red]")

    assert remainder == "card[title]"
    assert styles[0].entity == "title"


def test_multiple_anchors_in_order() -> None:
    """Every anchor is extracted, in source order."""
    remainder, styles = extract_inline_styles("a: bg red + b: 70 / c")

    assert remainder == "a+ b/ c"
    assert [(s.entity, s.tokens) for s in styles] == [
        ("a", ["bg red"]),
        ("b", ["70"]),
    ]


def test_empty_anchor_body_is_dropped() -> None:
    """An anchor without tokens is removed but produces no style."""
    remainder, styles = extract_inline_styles("a: + b")
    assert remainder == "a+ b"
    assert styles == []
