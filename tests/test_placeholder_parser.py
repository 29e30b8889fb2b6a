from __future__ import annotations

import pytest

from quicklink.templates.grammar import parse_placeholder, split_segments
from quicklink.templates.models import ArgumentOption
from quicklink.templates.scanner import scan_placeholders
from quicklink.utils.errors import PlaceholderSyntaxError


def test_scan_returns_spans_in_source_order() -> None:
    spans = scan_placeholders("a{b}c{d}")

    assert [(span.start, span.end, span.raw_content) for span in spans] == [
        (1, 4, "b"),
        (5, 8, "d"),
    ]
    assert spans[0].text == "{b}"


def test_scan_ignores_empty_braces_and_plain_text() -> None:
    assert scan_placeholders("https://x.com/{}") == []
    assert scan_placeholders("no placeholders here") == []


def test_scan_first_closing_brace_wins_for_nested_braces() -> None:
    spans = scan_placeholders("{{clipboard}}")

    assert len(spans) == 1
    assert spans[0].raw_content == "{clipboard"
    assert (spans[0].start, spans[0].end) == (0, 12)


def test_parse_clipboard_with_modifiers() -> None:
    placeholder = parse_placeholder("clipboard | trim | uppercase")

    assert placeholder.kind == "clipboard"
    assert placeholder.modifiers == ("trim", "uppercase")


def test_parse_selection_exact_keyword_only() -> None:
    assert parse_placeholder(" selection ").kind == "selection"
    assert parse_placeholder("Selection").kind == "unknown"
    assert parse_placeholder("selections").kind == "unknown"


def test_parse_argument_with_quoted_default() -> None:
    placeholder = parse_placeholder('argument name="q" default="hello world" | percent-encode')

    assert placeholder.kind == "argument"
    assert placeholder.name == "q"
    assert placeholder.default == "hello world"
    assert placeholder.modifiers == ("percent-encode",)
    assert placeholder.required is False


def test_parse_argument_without_default_is_required() -> None:
    placeholder = parse_placeholder("argument name=query")

    assert placeholder.name == "query"
    assert placeholder.default is None
    assert placeholder.options is None
    assert placeholder.required is True


def test_parse_argument_options_keep_pipes_inside_quotes() -> None:
    placeholder = parse_placeholder('argument name="type" options="Bug|bug, Feature|feature" | trim')

    assert placeholder.options == (
        ArgumentOption(label="Bug", value="bug"),
        ArgumentOption(label="Feature", value="feature"),
    )
    assert placeholder.modifiers == ("trim",)


def test_parse_argument_without_name_is_unknown() -> None:
    assert parse_placeholder("argument").kind == "unknown"
    assert parse_placeholder('argument default="x"').kind == "unknown"


def test_parse_date_like_kinds_with_format_and_offset() -> None:
    date = parse_placeholder('date format="yyyy-MM-dd" offset=+7d')
    time = parse_placeholder("time")
    stamp = parse_placeholder("datetime offset=-1h")

    assert date.kind == "date"
    assert date.format == "yyyy-MM-dd"
    assert date.offset == "+7d"
    assert date.is_date_like
    assert time.kind == "time"
    assert time.format is None
    assert stamp.kind == "datetime"
    assert stamp.offset == "-1h"


def test_parse_date_prefix_words_are_unknown() -> None:
    assert parse_placeholder("dates").kind == "unknown"
    assert parse_placeholder("timezone").kind == "unknown"


def test_parse_nested_brace_content_is_unknown() -> None:
    placeholder = parse_placeholder("{clipboard")

    assert placeholder.kind == "unknown"
    assert placeholder.base == "{clipboard"


def test_parse_empty_modifier_segments_are_dropped() -> None:
    placeholder = parse_placeholder("clipboard || trim |")

    assert placeholder.modifiers == ("trim",)


@pytest.mark.parametrize("content", ["|", "||", "|||"])
def test_parse_pipe_only_content_raises(content: str) -> None:
    with pytest.raises(PlaceholderSyntaxError, match="Empty placeholder") as exc_info:
        parse_placeholder(content)

    assert exc_info.value.raw_content == content


def test_split_segments_returns_raw_segments() -> None:
    assert split_segments(' a | "b|c" |d') == [" a ", ' "b|c" ', "d"]
    assert split_segments("||") == []


def test_parse_leading_empty_segment_is_dropped() -> None:
    placeholder = parse_placeholder("|clipboard|trim")

    assert placeholder.kind == "clipboard"
    assert placeholder.modifiers == ("trim",)
    assert split_segments("|clipboard") == ["clipboard"]
