"""Byte size formatting and parsing."""

import re

UNITS = ("B", "KB", "MB", "GB", "TB", "PB")

# Integer count with an optional unit, e.g. "32MB", "512 kb", "1024"
SIZE_RE = re.compile(r"^\s*(\d+)\s*([a-zA-Z]*)\s*$")


def human_size(n: int) -> str:
    """Render a byte count using the largest whole unit.

    Each step divides by 1024 and truncates, so 1536 bytes is "1 KB".
    """
    i = 0
    while n >= 1024 and i < len(UNITS) - 1:
        n //= 1024
        i += 1
    return f"{n} {UNITS[i]}"


def parse_size(value: int | str) -> int:
    """Parse a byte size such as "32MB" into a number of bytes.

    Args:
        value: Integer bytes, or a string with an optional unit from UNITS
            (case-insensitive, binary multiples)

    Returns:
        Size in bytes

    Raises:
        ValueError: If the value is negative or not a recognised size
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid size: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Size cannot be negative: {value}")
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid size: {value!r}")

    match = SIZE_RE.match(value)
    if not match:
        raise ValueError(f"Invalid size: {value!r}")

    number, unit = match.groups()
    unit = unit.upper() or "B"
    if unit not in UNITS:
        raise ValueError(f"Invalid size unit {unit!r}, expected one of {', '.join(UNITS)}")

    return int(number) * 1024 ** UNITS.index(unit)
