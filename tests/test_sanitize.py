"""Sanitizing model-authored HTML and segmenting texts for display."""

import pytest

from wortschatz.utils.sanitize import sanitize_html
from wortschatz.utils.text_segmentation import preview, split_words, tokenize_for_display


def test_formatting_survives():
    html = '<b>das Haus</b> <i>neuter</i> <span style="color: red">Plural: Häuser</span>'
    assert sanitize_html(html) == html
    assert "<br" in sanitize_html("eins<br>zwei")


@pytest.mark.parametrize(
    "html, forbidden",
    [
        ("<script>alert(1)</script><b>ok</b>", "alert"),
        ('<img src=x onerror="alert(1)">', "onerror"),
        ('<b onclick="steal()">x</b>', "onclick"),
        ('<a href="javascript:alert(1)">klick</a>', "javascript:"),
        ('<iframe src="https://evil.test"></iframe>', "iframe"),
        ('<span style="background: url(javascript:alert(1))">x</span>', "url("),
        ("<style>body{display:none}</style>", "display"),
        ("<!-- <script>alert(1)</script> -->", "script"),
    ],
)
def test_dangerous_markup_is_removed(html, forbidden):
    assert forbidden not in sanitize_html(html)


def test_unknown_tags_keep_their_text():
    assert sanitize_html('<a href="https://x.test">Haus</a>') == "Haus"


def test_empty_input():
    assert sanitize_html("") == ""
    assert sanitize_html(None) == ""


def test_words_keep_punctuation_and_skip_double_spaces():
    assert split_words("Das  Haus ist groß.") == ["Das", "Haus", "ist", "groß."]


def test_tokens_per_line():
    lines = tokenize_for_display("Guten Tag!\r\n\nWie geht's?")
    assert [[t.surface for t in line] for line in lines] == [["Guten", "Tag!"], [], ["Wie", "geht's?"]]
    assert lines[2][1].line == 2
    assert lines[2][1].index == 1


def test_preview_clamps_to_two_lines():
    assert preview("eins\nzwei") == "eins\nzwei"
    assert preview("eins\nzwei\ndrei") == "eins\nzwei …"
