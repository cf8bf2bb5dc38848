"""Tests for filename sanitization."""

import pytest

from epub_renamer.models import RESERVED_DEVICE_NAMES
from epub_renamer.sanitize import (
    collapse_whitespace,
    has_forbidden_chars,
    normalize_punctuation,
    remove_diacritics,
    sanitize_filename,
)


class TestSanitizeFilename:
    def test_none_is_untitled(self):
        assert sanitize_filename(None) == "Untitled"

    def test_whitespace_only_is_untitled(self):
        assert sanitize_filename("  \t\n ") == "Untitled"

    def test_replaces_unsafe_chars_with_spaces(self):
        assert sanitize_filename('a/b\\c:"d') == "a b c d"

    def test_replacement_does_not_fuse_words(self):
        assert sanitize_filename("Rock/Paper") == "Rock Paper"

    def test_all_forbidden_is_untitled(self):
        assert sanitize_filename('???<>|*') == "Untitled"

    def test_control_chars_replaced(self):
        assert sanitize_filename("a\x00b\x1fc") == "a b c"

    def test_collapses_whitespace(self):
        assert sanitize_filename("a\t\tb\n c") == "a b c"

    def test_trims_trailing_clutter(self):
        assert sanitize_filename("Tolhurst;") == "Tolhurst"
        assert sanitize_filename("Title. ,:;") == "Title"

    def test_keeps_leading_punctuation(self):
        assert sanitize_filename("...And Justice") == "...And Justice"

    def test_preserves_unicode_by_default(self):
        assert sanitize_filename("Café Müller") == "Café Müller"

    def test_strips_diacritics_when_asked(self):
        assert sanitize_filename("Café Müller", strip_diacritics=True) == "Cafe Muller"

    def test_diacritics_stripped_before_forbidden_pass(self):
        assert sanitize_filename("Éa:é", strip_diacritics=True) == "Ea e"


class TestPunctuation:
    @pytest.mark.parametrize("dash", ["—", "–", "―"])
    def test_dashes_become_hyphen(self, dash):
        assert sanitize_filename(f"War{dash}Peace") == "War-Peace"

    def test_ellipsis_becomes_period(self):
        assert sanitize_filename("Wait… what") == "Wait. what"

    def test_trailing_ellipsis_trimmed(self):
        assert sanitize_filename("Wait…") == "Wait"

    def test_curly_apostrophe(self):
        assert sanitize_filename("Don’t Panic") == "Don't Panic"

    def test_curly_double_quotes_become_spaces(self):
        # Straightened, then replaced as forbidden
        assert sanitize_filename("“Hello” ‘world’") == "Hello 'world'"

    def test_normalize_punctuation_direct(self):
        assert normalize_punctuation("“a”—‘b’…") == "\"a\"-'b'."


class TestReservedNames:
    @pytest.mark.parametrize("name", ["CON", "con", "Nul", "COM1", "lpt9", "AUX"])
    def test_reserved_prefixed(self, name):
        assert sanitize_filename(name) == f"_{name}"

    def test_reserved_after_trimming(self):
        assert sanitize_filename(" CON. ") == "_CON"

    @pytest.mark.parametrize("name", ["CONSOLE", "COM10", "Prnt", "AUXILIARY"])
    def test_similar_names_untouched(self, name):
        assert sanitize_filename(name) == name


class TestTotality:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            " ",
            "\t\n",
            "...",
            ";;;",
            '<>:"/\\|?*',
            "\x00\x01\x02",
            "nul",
            "  lpt3 ;",
            "“”",
            "…",
            "a" * 500,
            "Ünïcödé: títlé?",
        ],
    )
    def test_always_safe_and_non_empty(self, text):
        result = sanitize_filename(text)
        assert result
        assert not has_forbidden_chars(result)
        assert result.upper() not in RESERVED_DEVICE_NAMES

    @pytest.mark.parametrize("text", ["", "???", "Ünïcödé: títlé?", "con"])
    def test_ascii_mode_also_safe(self, text):
        result = sanitize_filename(text, strip_diacritics=True)
        assert result
        assert not has_forbidden_chars(result)
        assert result.upper() not in RESERVED_DEVICE_NAMES


class TestHelpers:
    def test_collapse_whitespace_does_not_trim(self):
        assert collapse_whitespace("  a \t b  ") == " a b "

    def test_remove_diacritics(self):
        assert remove_diacritics("L'Étranger à Zürich") == "L'Etranger a Zurich"

    def test_remove_diacritics_keeps_plain_ascii(self):
        assert remove_diacritics("Plain Text 123") == "Plain Text 123"

    def test_has_forbidden_chars(self):
        assert has_forbidden_chars("a:b")
        assert not has_forbidden_chars("a - b")
