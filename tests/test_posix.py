"""Tests for waypoint.routing.posix — POSIX class macro rewriting."""

import regex

from waypoint.routing.posix import POSIX_CLASSES, rewrite_posix_classes


def _fullmatch(expression: str, text: str) -> bool:
    return regex.fullmatch(rewrite_posix_classes(expression), text) is not None


class TestPosixTable:
    def test_all_macros_registered(self) -> None:
        assert set(POSIX_CLASSES) == {"alpha", "digit", "alnum", "xdigit", "ascii"}

    def test_alpha_is_unicode_letter_category(self) -> None:
        assert POSIX_CLASSES["alpha"] == r"\p{L}"


class TestRewrite:
    def test_standalone_macro_becomes_set(self) -> None:
        assert rewrite_posix_classes(":alpha:+") == r"[\p{L}]+"

    def test_macros_inside_bracket_expression(self) -> None:
        assert rewrite_posix_classes(r"[:digit::alpha:-_\.]+") == r"[\p{Nd}\p{L}\-_\.]+"

    def test_classic_bracketed_form(self) -> None:
        assert rewrite_posix_classes("[[:alpha:]]+") == r"[\p{L}]+"

    def test_negated_set(self) -> None:
        assert rewrite_posix_classes("[^:digit:]") == r"[^\p{Nd}]"

    def test_trailing_hyphen_left_alone(self) -> None:
        assert rewrite_posix_classes("[:alpha:-]") == r"[\p{L}-]"

    def test_escaped_colon_is_not_a_macro(self) -> None:
        assert rewrite_posix_classes(r"\:alpha:") == r"\:alpha:"

    def test_plain_expression_untouched(self) -> None:
        assert rewrite_posix_classes(r"[0-9]+(\.\d+)?") == r"[0-9]+(\.\d+)?"

    def test_unknown_macro_untouched(self) -> None:
        assert rewrite_posix_classes(":word:+") == ":word:+"


class TestRewrittenClassesMatch:
    def test_alpha_matches_non_ascii_letters(self) -> None:
        assert _fullmatch(":alpha:+", "jämяs")
        assert not _fullmatch(":alpha:+", "james5")

    def test_digit(self) -> None:
        assert _fullmatch(":digit:+", "57")
        assert not _fullmatch(":digit:+", "5a")

    def test_alnum(self) -> None:
        assert _fullmatch(":alnum:+", "james5")
        assert _fullmatch(":alnum:+", "ä5")
        assert not _fullmatch(":alnum:+", "james_5")

    def test_xdigit(self) -> None:
        assert _fullmatch(":xdigit:+", "5ace076")
        assert _fullmatch(":xdigit:+", "DEADbeef")
        assert not _fullmatch(":xdigit:+", "5acg")

    def test_ascii(self) -> None:
        assert _fullmatch(":ascii:+", "5ace076")
        assert not _fullmatch(":ascii:+", "é")

    def test_combined_set(self) -> None:
        assert _fullmatch(r"[:digit::alpha:-_\+\.]+", "j.ä_я3-s")
        assert not _fullmatch(r"[:digit::alpha:-_\+\.]+", "j/s")
