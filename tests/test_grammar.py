"""Tests for the shared grammar terminals."""

from __future__ import annotations

from ncmpy.errors import ConfigParseError
from ncmpy.grammar import (
    Scanner,
    comment,
    ignored_line,
    line_end,
    skip_ignored,
    spaces,
)


def test_spaces_counts_horizontal_whitespace_only() -> None:
    scanner = Scanner(" \t \nx")
    assert spaces(scanner) == 3
    assert scanner.peek() == "\n"
    assert spaces(scanner) == 0


def test_comment_stops_before_line_ending() -> None:
    scanner = Scanner("# note\nrest")
    assert comment(scanner)
    assert scanner.peek() == "\n"


def test_comment_does_not_match_other_text() -> None:
    scanner = Scanner("def_key")
    assert not comment(scanner)
    assert scanner.pos == 0


def test_line_end_accepts_trailing_comment() -> None:
    scanner = Scanner("   # trailing\n\nnext")
    assert line_end(scanner)
    assert scanner.peek() == "n"


def test_line_end_backtracks_without_newline() -> None:
    scanner = Scanner("  word\n")
    assert not line_end(scanner)
    assert scanner.pos == 0


def test_ignored_line_matches_blank_and_comment_lines() -> None:
    scanner = Scanner("\n   \n# comment\n  # indented\ndef_key")
    skip_ignored(scanner)
    assert scanner.text[scanner.pos :] == "def_key"


def test_ignored_line_accepts_unterminated_final_comment() -> None:
    scanner = Scanner("# last line")
    assert ignored_line(scanner)
    assert scanner.at_end()


def test_ignored_line_rejects_content() -> None:
    scanner = Scanner("  scroll_up\n")
    assert not ignored_line(scanner)
    assert scanner.pos == 0


def test_take_until_leaves_position_when_missing() -> None:
    scanner = Scanner('abc"def')
    assert scanner.take_until("}") is None
    assert scanner.pos == 0
    assert scanner.take_until('"') == "abc"
    assert scanner.peek() == '"'


def test_location_is_one_based() -> None:
    scanner = Scanner("ab\ncde\nf")
    assert scanner.location(0) == (1, 1)
    assert scanner.location(4) == (2, 2)
    assert scanner.location(7) == (3, 1)


def test_error_carries_position_and_source() -> None:
    scanner = Scanner("ab\ncd", source="bindings")
    scanner.pos = 4
    error = scanner.error("boom")
    assert isinstance(error, ConfigParseError)
    assert (error.line, error.column) == (2, 2)
    assert str(error) == "bindings:2:2: boom"
