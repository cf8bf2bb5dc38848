"""Tests for authors.py -- conservative author reordering and inference."""

import pytest

from epub_renamer.authors import (
    clean_author,
    infer_author_from_filename,
    insert_space_after_initials,
    is_name_suffix,
    join_authors,
    normalize_author,
)
from epub_renamer.models import AuthorOrder


class TestNormalizeAuthor:
    def test_first_last(self):
        assert normalize_author("Doe, Jane", AuthorOrder.FIRST_LAST) == "Jane Doe"

    def test_last_first(self):
        assert normalize_author("Doe, Jane", AuthorOrder.LAST_FIRST) == "Doe, Jane"

    def test_as_is_only_cleans(self):
        assert normalize_author("Doe ,  Jane", AuthorOrder.AS_IS) == "Doe, Jane"

    def test_no_comma_never_reordered(self):
        assert normalize_author("Jane Doe", AuthorOrder.LAST_FIRST) == "Jane Doe"

    def test_middle_names_kept_together(self):
        assert (
            normalize_author("Tolkien, John Ronald Reuel", AuthorOrder.FIRST_LAST)
            == "John Ronald Reuel Tolkien"
        )

    def test_multi_word_last_name(self):
        assert (
            normalize_author("van Beethoven, Ludwig", AuthorOrder.FIRST_LAST)
            == "Ludwig van Beethoven"
        )

    def test_two_full_names_left_alone(self):
        assert (
            normalize_author("Foo Bar, Zoo Goo", AuthorOrder.FIRST_LAST)
            == "Foo Bar, Zoo Goo"
        )

    def test_suffix_first_last(self):
        assert (
            normalize_author("Doe, Jane, Jr.", AuthorOrder.FIRST_LAST) == "Jane Doe, Jr."
        )

    def test_suffix_last_first(self):
        assert (
            normalize_author("Doe, Jane, Jr.", AuthorOrder.LAST_FIRST)
            == "Doe, Jane, Jr."
        )

    def test_third_segment_not_a_suffix(self):
        assert (
            normalize_author("Doe, Jane, PhD", AuthorOrder.FIRST_LAST)
            == "Doe, Jane, PhD"
        )

    def test_too_many_segments(self):
        assert (
            normalize_author("Foo, Bar, Zoo, Goo", AuthorOrder.FIRST_LAST)
            == "Foo, Bar, Zoo, Goo"
        )

    def test_doubled_commas_collapsed(self):
        assert normalize_author("Doe,,Jane", AuthorOrder.FIRST_LAST) == "Jane Doe"

    def test_initial_spacing_fixed_before_reorder(self):
        assert (
            normalize_author("Layton, J.Kent", AuthorOrder.FIRST_LAST) == "J. Kent Layton"
        )

    def test_initial_spacing_fixed_as_is(self):
        assert normalize_author("J.Kent Layton", AuthorOrder.AS_IS) == "J. Kent Layton"

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty(self, text):
        assert normalize_author(text, AuthorOrder.FIRST_LAST) == ""

    def test_whitespace_returned_unchanged(self):
        assert normalize_author("   ", AuthorOrder.FIRST_LAST) == "   "


class TestCleaning:
    def test_insert_space_after_initials(self):
        assert insert_space_after_initials("J.R.R.Tolkien") == "J. R. R. Tolkien"

    def test_lowercase_abbreviation_untouched(self):
        assert insert_space_after_initials("e.g.") == "e.g."

    def test_existing_space_untouched(self):
        assert insert_space_after_initials("J. Kent") == "J. Kent"

    def test_clean_author(self):
        assert clean_author("  Doe  ,Jane   Q. ") == "Doe, Jane Q."


class TestIsNameSuffix:
    @pytest.mark.parametrize("value", ["Jr.", "jr", "SR", "II", "iii", "IV.", "v"])
    def test_suffixes(self, value):
        assert is_name_suffix(value)

    @pytest.mark.parametrize("value", ["PhD", "Jane", "VI", "MD"])
    def test_non_suffixes(self, value):
        assert not is_name_suffix(value)


class TestInferAuthorFromFilename:
    def test_double_dash_tail(self):
        assert (
            infer_author_from_filename("A New Day Yesterday -- Mike Barnes")
            == "Mike Barnes"
        )

    def test_last_separator_wins(self):
        assert infer_author_from_filename("A -- B -- Jane Doe") == "Jane Doe"

    def test_single_dash_ignored(self):
        assert infer_author_from_filename("Dune - Frank Herbert") is None

    def test_numeric_tail_rejected(self):
        assert infer_author_from_filename("Dune -- 9780441013593") is None

    def test_empty_tail_rejected(self):
        assert infer_author_from_filename("Dune -- ") is None

    def test_long_tail_rejected(self):
        assert infer_author_from_filename("Dune -- " + "x" * 61) is None

    @pytest.mark.parametrize("stem", [None, "", "   "])
    def test_blank(self, stem):
        assert infer_author_from_filename(stem) is None


class TestJoinAuthors:
    def test_joins_with_comma(self):
        assert join_authors(["Jane Doe", "Richard Roe"]) == "Jane Doe, Richard Roe"

    def test_unknown_when_empty(self):
        assert join_authors([]) == "Unknown Author"

    def test_skips_blank_names(self):
        assert join_authors(["", "  ", "Jane Doe"]) == "Jane Doe"
