from __future__ import annotations

from quicklink.templates.attributes import extract_attribute, strip_quoted_pairs
from quicklink.templates.models import ArgumentOption
from quicklink.templates.options import parse_options


def test_extract_quoted_value_keeps_spaces_and_symbols() -> None:
    content = 'argument name="My Name" default="a=b|c"'

    assert extract_attribute(content, "name") == "My Name"
    assert extract_attribute(content, "default") == "a=b|c"


def test_extract_unquoted_value_stops_at_whitespace() -> None:
    assert extract_attribute("argument name=query default=x", "name") == "query"


def test_extract_quoted_form_wins_over_unquoted() -> None:
    assert extract_attribute('argument name=plain name="quoted value"', "name") == "quoted value"


def test_extract_does_not_match_key_suffix() -> None:
    content = 'argument username="bob" name=alice'

    assert extract_attribute(content, "name") == "alice"
    assert extract_attribute('argument username="bob"', "name") is None


def test_extract_missing_key_returns_none() -> None:
    assert extract_attribute("argument name=q", "default") is None


def test_extract_empty_quoted_value() -> None:
    assert extract_attribute('argument name="q" default=""', "default") == ""


def test_strip_quoted_pairs_leaves_stray_quote() -> None:
    stripped = strip_quoted_pairs('argument name="x" default="y')

    assert "name" not in stripped
    assert stripped.count('"') == 1


def test_parse_options_label_value_pairs() -> None:
    assert parse_options("Bug|bug, Feature|feature") == [
        ArgumentOption(label="Bug", value="bug"),
        ArgumentOption(label="Feature", value="feature"),
    ]


def test_parse_options_plain_tokens_and_empty_parts() -> None:
    assert parse_options(" red ,, blue ,") == [
        ArgumentOption(label="red", value="red"),
        ArgumentOption(label="blue", value="blue"),
    ]


def test_parse_options_splits_on_first_pipe_only() -> None:
    assert parse_options("Label|val|ue") == [ArgumentOption(label="Label", value="val|ue")]


def test_parse_options_empty_text() -> None:
    assert parse_options("") == []
