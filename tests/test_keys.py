"""Tests for logical key decoding."""

from __future__ import annotations

from iota.tui.keys import (
    BACKSPACE,
    ENTER,
    ESCAPE,
    Key,
    KeyKind,
    parse_key,
    split_keys,
)


class TestParseKey:
    """parse_key maps raw chunks to logical keys."""

    def test_printable_character(self) -> None:
        assert parse_key("a") == Key.from_char("a")

    def test_wide_character(self) -> None:
        key = parse_key("世")
        assert key.kind is KeyKind.CHAR
        assert key.char == "世"

    def test_combining_mark_is_a_character(self) -> None:
        assert parse_key("\u0301").kind is KeyKind.CHAR

    def test_escape(self) -> None:
        assert parse_key("\x1b") == ESCAPE

    def test_enter_from_cr_and_lf(self) -> None:
        assert parse_key("\r") == ENTER
        assert parse_key("\n") == ENTER

    def test_backspace_variants(self) -> None:
        assert parse_key("\x7f") == BACKSPACE
        assert parse_key("\x08") == BACKSPACE

    def test_ctrl_letter(self) -> None:
        key = parse_key("\x13")
        assert key.kind is KeyKind.OTHER
        assert key.name == "ctrl+s"

    def test_arrow_keys_are_other(self) -> None:
        key = parse_key("\x1b[A")
        assert key.kind is KeyKind.OTHER
        assert key.name == "up"

    def test_alt_letter(self) -> None:
        assert parse_key("\x1bx").name == "alt+x"

    def test_unknown_sequence_is_unnamed_other(self) -> None:
        assert parse_key("\x1b[999z") == Key.other()

    def test_empty_input(self) -> None:
        assert parse_key("").kind is KeyKind.OTHER

    def test_tab_is_not_inserted(self) -> None:
        assert parse_key("\t") == Key.other("tab")


class TestSplitKeys:
    """split_keys breaks a read into one chunk per key."""

    def test_plain_text(self) -> None:
        assert split_keys("abc") == ["a", "b", "c"]

    def test_csi_sequence_kept_whole(self) -> None:
        assert split_keys("a\x1b[3~b") == ["a", "\x1b[3~", "b"]

    def test_ss3_sequence_kept_whole(self) -> None:
        assert split_keys("\x1bOA") == ["\x1bOA"]

    def test_lone_escape(self) -> None:
        assert split_keys("\x1b") == ["\x1b"]

    def test_double_escape(self) -> None:
        assert split_keys("\x1b\x1b") == ["\x1b", "\x1b"]

    def test_alt_prefix(self) -> None:
        assert split_keys("\x1bxy") == ["\x1bx", "y"]

    def test_every_chunk_parses(self) -> None:
        keys = [parse_key(chunk) for chunk in split_keys("hi\x7f\r")]
        assert keys == [Key.from_char("h"), Key.from_char("i"), BACKSPACE, ENTER]
