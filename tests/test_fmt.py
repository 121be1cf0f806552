import pytest

from pinguin.fmt import (
    between,
    bounded_equal,
    format_message,
    format_to,
    hex_str,
    int_to_str,
    put_string,
)


def test_put_string_emits_each_char():
    out = []
    put_string(out.append, "hello")
    assert out == list("hello")


def test_put_string_stops_at_nul():
    out = []
    put_string(out.append, "ab\0cd")
    assert "".join(out) == "ab"


@pytest.mark.parametrize("num", [0, 1, 9, 10, 99, 100, 12345, 4294967295])
def test_int_to_str_round_trip(num):
    assert int(int_to_str(num)) == num


def test_int_to_str_negative_is_unsigned():
    assert int_to_str(-1) == "4294967295"


def test_hex_zero():
    assert hex_str(0) == "0x0"


def test_hex_upper_case():
    assert hex_str(255) == "0xFF"


@pytest.mark.parametrize("num", [1, 15, 16, 4096, 0xB8000, 0xFFFFFFFF])
def test_hex_round_trip(num):
    text = hex_str(num)
    assert text.startswith("0x")
    assert int(text, 16) == num
    assert text[2:] == text[2:].upper()


def test_format_decimal_matches_int_to_str():
    assert format_message("n=%d", 7) == "n=" + int_to_str(7)
    assert format_message("%i", 123) == int_to_str(123)


def test_format_hex_matches_hex_str():
    assert format_message("%x", 0xAA55) == hex_str(0xAA55)


def test_format_string_and_char():
    assert format_message("%s", "hello") == "hello"
    assert format_message("%c", "z") == "z"
    assert format_message("%c", ord("q")) == "q"


def test_format_percent_escape():
    assert format_message("a%%b") == format_message("a%cb", "%")


def test_unknown_specifier_dropped():
    assert format_message("x%qy") == format_message("xy")


def test_trailing_percent_dropped():
    assert format_message("ab%") == format_message("ab")


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        format_message("%d %d", 1)


def test_format_to_matches_format_message():
    out = []
    format_to(out.append, "%s:%d:%x", "file", 12, 34)
    assert "".join(out) == format_message("%s:%d:%x", "file", 12, 34)


def test_bounded_equal_same():
    assert bounded_equal("help", "help", 512)


def test_bounded_equal_prefix_differs():
    assert not bounded_equal("help", "helpx", 512)


def test_bounded_equal_limited_size():
    assert bounded_equal("abcX", "abcY", 3)
    assert not bounded_equal("abcX", "abcY", 4)


def test_bounded_equal_stops_at_nul():
    assert bounded_equal("ab\0x", "ab\0y", 10)


def test_bounded_equal_bytes_and_str():
    assert bounded_equal(b"KERNEL  ELF", "KERNEL  ELF", 11)
    assert not bounded_equal(b"KERNEL  BIN", "KERNEL  ELF", 11)


def test_between_inclusive():
    assert between(1, 1, 3)
    assert between(3, 1, 3)
    assert not between(4, 1, 3)
    assert not between(0, 1, 3)