from __future__ import annotations

from datetime import datetime

from quicklink.render.models import RenderPolicy
from quicklink.render.processor import process

NOW = datetime(2024, 1, 27, 14, 5, 9)


def test_process_substitutes_supplied_argument() -> None:
    result = process('https://x.com?q={argument name="q"}', arguments={"q": "hi"})

    assert result.url == "https://x.com?q=hi"
    assert result.success is True
    assert result.missing_arguments == []
    assert result.errors == []


def test_process_reports_missing_argument_and_keeps_literal() -> None:
    template = 'https://x.com?q={argument name="q"}'

    result = process(template)

    assert result.success is False
    assert result.missing_arguments == ["q"]
    assert result.url == template
    assert result.entries[0].status == "missing"
    assert result.entries[0].reason == "missing_argument"


def test_process_clipboard_modifier_chain() -> None:
    result = process("{clipboard | trim | lowercase | percent-encode}", clipboard="  HI THERE  ")

    assert result.url == "hi%20there"
    assert result.success is True


def test_process_uses_default_when_argument_absent() -> None:
    result = process('s?q={argument name="q" default="hello world" | percent-encode}')

    assert result.url == "s?q=hello%20world"
    assert result.success is True


def test_process_supplied_value_wins_over_default_even_when_empty() -> None:
    result = process('[{argument name="q" default="x"}]', arguments={"q": ""})

    assert result.url == "[]"


def test_process_argument_lookup_is_exact() -> None:
    result = process("{argument name=Q}", arguments={"q": "lower"})

    assert result.missing_arguments == ["Q"]


def test_process_missing_arguments_keep_source_order_and_duplicates() -> None:
    result = process("{argument name=b}/{argument name=a}/{argument name=b}")

    assert result.missing_arguments == ["b", "a", "b"]


def test_process_nested_braces_pass_through() -> None:
    result = process("{{clipboard}}", clipboard="x")

    assert result.url == "{{clipboard}}"
    assert result.success is True
    assert result.entries[0].status == "passthrough"
    assert result.entries[0].reason == "unknown_placeholder"


def test_process_clipboard_and_selection_without_input_keep_literal() -> None:
    result = process("{clipboard}-{selection | uppercase}")

    assert result.url == "{clipboard}-{selection | uppercase}"
    assert result.success is True
    assert [entry.reason for entry in result.entries] == ["no_input", "no_input"]


def test_process_selection_value() -> None:
    assert process("{selection | uppercase}", selection="abc").url == "ABC"


def test_process_dates_use_reference_instant() -> None:
    result = process(
        "{date format=yyyy-MM-dd offset=+7d}|{time}|{datetime}",
        reference_instant=NOW,
    )

    assert result.url == "2024-02-03|2:05 PM|Jan 27, 2024, 2:05 PM"


def test_process_respects_policy() -> None:
    policy = RenderPolicy(medium_date_pattern="yyyy/MM/dd")

    assert process("{date}", reference_instant=NOW, policy=policy).url == "2024/01/27"


def test_process_empty_placeholder_is_error_and_kept() -> None:
    result = process("a{|}b{clipboard}", clipboard="c")

    assert result.url == "a{|}bc"
    assert result.success is False
    assert result.errors == ["Empty placeholder"]
    assert result.entries[0].status == "error"


def test_process_unknown_kinds_and_modifiers_are_tolerated() -> None:
    result = process("{weather}-{clipboard | reverse}", clipboard="ab")

    assert result.url == "{weather}-ab"
    assert result.success is True


def test_process_template_without_placeholders() -> None:
    result = process("https://example.com/{}")

    assert result.url == "https://example.com/{}"
    assert result.entries == []
    assert result.success is True


def test_process_summary_counts_statuses() -> None:
    result = process("{clipboard}{argument name=a}{other}{|}", clipboard="x")

    summary = result.summary
    assert summary.total_placeholders == 4
    assert summary.replaced_count == 1
    assert summary.missing_count == 1
    assert summary.passthrough_count == 1
    assert summary.error_count == 1


def test_process_entries_record_offsets_in_template() -> None:
    template = "ab{clipboard}cd{argument name=x}"
    result = process(template, arguments={"x": "long replacement"}, clipboard="c")

    assert result.url == "abccdlong replacement"
    for entry in result.entries:
        assert template[entry.start : entry.end] == entry.original_text


def test_process_percent_encode_tolerates_lone_surrogate() -> None:
    result = process("q={clipboard | percent-encode}", clipboard="a\udc80b")

    assert result.url == "q=a\udc80b"
    assert result.success is True


def test_process_leading_pipe_keeps_base() -> None:
    result = process("{|clipboard | uppercase}", clipboard="x")

    assert result.url == "X"
