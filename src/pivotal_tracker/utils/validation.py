"""Identifier format checks."""

import re

_NUMERIC_ID = re.compile(r"[0-9]+")


def is_numeric_id(value: str | int) -> bool:
    """Check that an identifier is a string of ASCII digits.

    Integers are checked through their decimal representation, so negative
    numbers are rejected.
    """
    return _NUMERIC_ID.fullmatch(str(value)) is not None
