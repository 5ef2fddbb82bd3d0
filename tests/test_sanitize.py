"""
Tests for utils/sanitize.py - HTML tag stripping.
"""
import pytest

from translator_gateway.utils.sanitize import sanitize_input


class TestSanitizeInput:
    """Tests for sanitize_input."""

    def test_strips_tags_and_whitespace(self):
        assert sanitize_input("<b>hi</b> there ") == "hi there"

    def test_strips_tags_with_attributes(self):
        text = '<a href="https://example.com" class="x">link</a> text'
        assert sanitize_input(text) == "link text"

    def test_strips_script_tags_but_keeps_content(self):
        assert sanitize_input("<script>alert(1)</script>") == "alert(1)"

    def test_plain_text_unchanged(self):
        assert sanitize_input("Hello world") == "Hello world"

    def test_unclosed_bracket_kept(self):
        assert sanitize_input("1 < 2") == "1 < 2"

    def test_whitespace_inside_tags_trimmed(self):
        assert sanitize_input("<p>  padded  </p>") == "padded"

    def test_only_tags_becomes_empty(self):
        assert sanitize_input("  <br/><hr>  ") == ""

    def test_multiline_tag(self):
        assert sanitize_input("<div\n class='a'>x</div>") == "x"

    @pytest.mark.parametrize("value", [
        "<b>hi</b> there ",
        "<b> x</b>",
        "  <<b>b>  ",
        "<a<b>>text",
        "a > b < c",
        "\t<i>\n</i> tail <",
        "",
    ])
    def test_idempotent(self, value):
        once = sanitize_input(value)
        assert sanitize_input(once) == once
