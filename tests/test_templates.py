"""Tests for templates module (parametrize, parameters_typeddict, render)."""

import pytest
from pydantic import ValidationError
from typing_extensions import TypedDict

from deeptype.config import TemplateMarkers
from deeptype.templates import parameters_typeddict, parametrize, render
from deeptype._internal import td_eq


def test_parametrize() -> None:
    result = parametrize("{{foo}} bar {{baz}}", "{{", "}}")
    assert result == {"foo": str, "baz": str}
    assert "bar" not in result


def test_same_marker_on_both_sides() -> None:
    assert parametrize("$user$ logged in at $time$", "$") == {"user": str, "time": str}


def test_duplicates_collapse_in_first_seen_order() -> None:
    result = parametrize("{b} {a} {b}", "{", "}")
    assert list(result) == ["b", "a"]


def test_marker_pair_split_across_tokens_is_ignored() -> None:
    assert parametrize("{{first name}}", "{{", "}}") == {}


def test_surrounding_text_in_token() -> None:
    assert parametrize("Hello, <<name>>!", "<<", ">>") == {"name": str}


def test_first_pair_per_token() -> None:
    """Only the text between the first open marker and the next close counts."""
    assert parametrize("{a}{b}", "{", "}") == {"a": str}
    assert parametrize("{a{b}", "{", "}") == {"a{b": str}


def test_close_before_open_is_ignored() -> None:
    assert parametrize("}x{", "{", "}") == {}


def test_no_placeholders() -> None:
    assert parametrize("", "{{", "}}") == {}
    assert parametrize("plain text only", "{{", "}}") == {}


def test_options_record_wins() -> None:
    markers = TemplateMarkers(open="[[", close="]]")
    assert parametrize("[[x]] {{y}}", "{{", "}}", options=markers) == {"x": str}


def test_template_markers_default_close() -> None:
    assert TemplateMarkers(open="%").close_marker == "%"


def test_empty_marker_rejected() -> None:
    with pytest.raises(ValidationError):
        parametrize("{x}", "")


def test_parameters_typeddict() -> None:
    result = parameters_typeddict("Dear {{name}}, your order {{order_id}} shipped", "{{", "}}", name="Email")
    expected = TypedDict("Email", {"name": str, "order_id": str})
    assert td_eq(result, expected)


def test_render() -> None:
    assert render("{{greeting}}, {{name}}!", "{{", {"greeting": "Hi", "name": "Ada"}, "}}") == "Hi, Ada!"
    assert render("total: $n$ items", "$", {"n": 3}) == "total: 3 items"


def test_render_missing_value() -> None:
    with pytest.raises(KeyError, match="name"):
        render("Hello {name}", "{", {}, "}")


def test_render_leaves_unrecognised_tokens() -> None:
    assert render("{{first name}} {{x}}", "{{", {"x": 1}, "}}") == "{{first name}} 1"
