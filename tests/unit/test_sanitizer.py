"""Unit tests for the HTML sanitizer."""

import html

import pytest

from atsresume.contexts.templating.sanitizer import escape_html


@pytest.mark.unit
def test_escapes_all_special_characters():
    assert escape_html('a & b < c > d "e"') == "a &amp; b &lt; c &gt; d &quot;e&quot;"


@pytest.mark.unit
def test_ampersand_escaped_first():
    """Pre-escaped input is escaped again, not left alone or double-mangled."""
    assert escape_html("&lt;") == "&amp;lt;"
    assert escape_html("<") == "&lt;"


@pytest.mark.unit
def test_script_tag():
    assert (
        escape_html("Built <script>alert(1)</script> tool")
        == "Built &lt;script&gt;alert(1)&lt;/script&gt; tool"
    )


@pytest.mark.unit
def test_single_quote_untouched():
    assert escape_html("O'Brien") == "O'Brien"


@pytest.mark.unit
@pytest.mark.parametrize("value, expected", [(42, "42"), (3.5, "3.5"), (None, "None"), (True, "True")])
def test_coerces_non_strings(value, expected):
    assert escape_html(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "",
        "plain",
        "&&&",
        '<a href="x">&amp;</a>',
        '"quoted" & <tagged> & &quot;',
        "unicode — ünïcödé <ok>",
    ],
)
def test_no_raw_specials_and_round_trip(text):
    escaped = escape_html(text)

    without_entities = (
        escaped.replace("&amp;", "").replace("&lt;", "").replace("&gt;", "").replace("&quot;", "")
    )
    for char in '&<>"':
        assert char not in without_entities

    assert html.unescape(escaped) == text
