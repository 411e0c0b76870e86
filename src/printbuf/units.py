"""Human-readable rendering of integer quantities.

Scales a value by the largest power of the configured base (1024 for
binary prefixes, 1000 for SI prefixes) at which it is still >= 1, and
renders it truncated to one fractional digit with a magnitude suffix.
Values below the base are rendered as a plain integer.

Example:
    >>> human_readable(1048576, Units.BINARY)
    '1.0 MiB'
    >>> human_readable(1500, Units.DECIMAL)
    '1.5 kB'
    >>> human_readable(512, Units.BINARY)
    '512'

Thread Safety:
Pure functions over immutable tables.

"""

from __future__ import annotations

from enum import Enum

U64_MAX = (1 << 64) - 1
S64_MIN = -(1 << 63)
S64_MAX = (1 << 63) - 1


class Units(Enum):
    """Base used when scaling numbers for display."""

    BINARY = 1024  # KiB, MiB, ... (powers of 2^10)
    DECIMAL = 1000  # kB, MB, ... (powers of 10^3)


_SUFFIXES: dict[Units, tuple[str, ...]] = {
    Units.BINARY: ("KiB", "MiB", "GiB", "TiB", "PiB", "EiB"),
    Units.DECIMAL: ("kB", "MB", "GB", "TB", "PB", "EB"),
}


def check_u64(value: int) -> int:
    """Validate that value fits an unsigned 64-bit integer."""
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"{value} is out of range for an unsigned 64-bit value")
    return value


def check_s64(value: int) -> int:
    """Validate that value fits a signed 64-bit integer."""
    if not S64_MIN <= value <= S64_MAX:
        raise ValueError(f"{value} is out of range for a signed 64-bit value")
    return value


def human_readable(value: int, units: Units = Units.BINARY) -> str:
    """Render a non-negative integer with a magnitude suffix.

    Args:
        value: Quantity to render (0..2**64-1)
        units: Scaling base and suffix table

    Returns:
        e.g. ``"1.5 MiB"``, or the raw integer when value < base

    Raises:
        ValueError: If value is outside the unsigned 64-bit range
    """
    check_u64(value)
    base = units.value
    suffixes = _SUFFIXES[units]

    exponent = 0
    scale = 1
    while exponent < len(suffixes) and value >= scale * base:
        scale *= base
        exponent += 1

    if exponent == 0:
        return str(value)

    whole, rem = divmod(value, scale)
    tenths = rem * 10 // scale
    return f"{whole}.{tenths} {suffixes[exponent - 1]}"


def human_readable_signed(value: int, units: Units = Units.BINARY) -> str:
    """Signed variant of human_readable(); the sign precedes the magnitude."""
    check_s64(value)
    if value < 0:
        return "-" + human_readable(-value, units)
    return human_readable(value, units)


__all__ = [
    "Units",
    "check_s64",
    "check_u64",
    "human_readable",
    "human_readable_signed",
]
