"""Interpretation of raw clinical attribute values, which are stored as strings."""
from math import isfinite

NA_VALUE = 'NA'


def parse_number(value: str | None) -> float | None:
    """The finite float represented by the string, or None if it does not represent one."""
    if value is None or '_' in value:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not isfinite(number):
        return None
    return number
