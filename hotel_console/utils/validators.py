from datetime import date, datetime

from hotel_console.constants.response_messages import (ERROR_EMPTY_VALUE,
                                                       ERROR_INVALID_DATE,
                                                       ERROR_INVALID_INTEGER,
                                                       ERROR_INVALID_NUMBER,
                                                       ERROR_NON_POSITIVE_ID)

DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d")


class InputFormatError(ValueError):
    """A console value could not be parsed into the expected shape."""


def parse_int(value: str) -> int:
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        raise InputFormatError(ERROR_INVALID_INTEGER.format(value=value))


def parse_float(value: str) -> float:
    try:
        return float(value.strip())
    except (AttributeError, ValueError):
        raise InputFormatError(ERROR_INVALID_NUMBER.format(value=value))


def parse_date(value: str) -> date:
    """
    Accepts Month/Day/Year as typed at the prompt, and ISO dates.
    """
    cleaned = (value or "").strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    raise InputFormatError(ERROR_INVALID_DATE.format(value=value))


def validate_user_id(value: int) -> int:
    return validate_positive_id(value, "userID")


def validate_positive_id(value: int, field: str = "id") -> int:
    if value <= 0:
        raise InputFormatError(ERROR_NON_POSITIVE_ID.format(field=field))
    return value


def validate_not_blank(value: str, field: str) -> str:
    if value is None or not value.strip():
        raise InputFormatError(ERROR_EMPTY_VALUE.format(field=field))
    return value
