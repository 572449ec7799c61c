import pytest

from labtools.fmt import atoi, format_message


@pytest.mark.parametrize("n", [0, 7, -42, 2**31 - 1, -(2**31)])
def test_decimal_round_trip(n):
    assert format_message("%d", n) == str(n)


def test_decimal_wraps_to_32_bits():
    assert format_message("%d", 2**31) == format_message("%d", -(2**31))


@pytest.mark.parametrize("n", [0, 1, 255, 4096, 2**32 - 1])
def test_hex_round_trip(n):
    assert int(format_message("%x", n), 16) == n


def test_hex_is_upper_case():
    assert format_message("%x", 255) == "FF"


def test_hex_negative_is_unsigned():
    assert format_message("%x", -1) == format_message("%x", 2**32 - 1)


def test_unsigned_long_wraps():
    assert format_message("%l", -1) == format_message("%l", 2**64 - 1)


def test_pointer_is_zero_padded():
    assert format_message("%p", 0xAB) == "0x00000000000000AB"


def test_null_string():
    assert format_message("%s", None) == "(null)"


def test_string_and_char():
    assert format_message("[%s%c]", "ab", ord("c")) == "[" + "ab" + "c" + "]"


def test_unknown_sequence_is_echoed():
    assert format_message("%q") == "%q"


def test_literal_percent():
    assert format_message("%%d") == "%" + "d"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        format_message("%d %d", 1)


@pytest.mark.parametrize("n", [0, 5, 12345])
def test_atoi_round_trip(n):
    assert atoi(str(n)) == n


def test_atoi_stops_at_non_digit():
    assert atoi("123abc") == atoi("123")


def test_atoi_ignores_sign():
    assert atoi("-5") == atoi("")
    assert atoi("") == 0