import io
from datetime import date

import pytest

from hotel_console.cli.line_input import EndOfInput, LineInput
from hotel_console.utils.validators import (InputFormatError, parse_date,
                                            validate_not_blank,
                                            validate_user_id)


def make_input(text):
    out = io.StringIO()
    return LineInput(stream=io.StringIO(text), out=out), out


def test_read_line_strips_newline_and_prints_prompt():
    line_input, out = make_input("hello\n")

    assert line_input.read_line("Name: ") == "hello"
    assert out.getvalue() == "Name: "


def test_read_line_at_end_of_input():
    line_input, _ = make_input("")

    with pytest.raises(EndOfInput):
        line_input.read_line()


def test_read_int_retries_until_valid():
    line_input, out = make_input("abc\n\n4.5\n 12 \n")

    assert line_input.read_int() == 12
    assert out.getvalue().count("Your input is invalid!") == 3


def test_read_int_gives_up_only_at_end_of_input():
    line_input, _ = make_input("nope\n")

    with pytest.raises(EndOfInput):
        line_input.read_int()


def test_read_float_and_date():
    line_input, _ = make_input("12.5\n13/01/2025\n01/13/2025\n")

    assert line_input.read_float() == 12.5
    assert line_input.read_date() == date(2025, 1, 13)


@pytest.mark.parametrize("raw, expected", [
    ("01/01/2025", date(2025, 1, 1)),
    ("1/2/2025", date(2025, 1, 2)),
    ("2025-03-04", date(2025, 3, 4)),
])
def test_parse_date_formats(raw, expected):
    assert parse_date(raw) == expected


def test_parse_date_rejects_garbage():
    with pytest.raises(InputFormatError):
        parse_date("tomorrow")


def test_validators():
    assert validate_user_id(3) == 3
    with pytest.raises(InputFormatError):
        validate_user_id(0)
    with pytest.raises(InputFormatError):
        validate_not_blank("   ", "name")
