"""
Utility functions for duration flags and log output.
"""

from typing import Union
from datetime import timedelta
import re


_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1000,
    "µs": 1000,
    "ms": 1000 ** 2,
    "s": 1000 ** 3,
    "m": 60 * 1000 ** 3,
    "h": 3600 * 1000 ** 3,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: Union[str, timedelta, int, float]) -> timedelta:
    """
    Parse a duration such as ``"200ms"``, ``"1us"`` or ``"1m30s"``.

    Args:
        value: Duration string, timedelta, or a number of seconds

    Returns:
        Parsed timedelta

    Raises:
        ValueError: If the string is not a valid duration
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)

    text = value.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration '{value}'")

    total_ns = 0.0
    pos = 0
    for match in _COMPONENT.finditer(text):
        if match.start() != pos:
            break
        total_ns += float(match.group(1)) * _UNIT_NANOSECONDS[match.group(2)]
        pos = match.end()

    if pos != len(text):
        raise ValueError(f"invalid duration '{value}'")

    # timedelta resolution is one microsecond
    try:
        return timedelta(microseconds=sign * total_ns / 1000)
    except OverflowError as e:
        raise ValueError(f"duration '{value}' is out of range") from e


def format_duration(duration: timedelta) -> str:
    """
    Format a timedelta compactly for log messages.

    Args:
        duration: Duration to format

    Returns:
        A string like ``"200ms"``, ``"1.5s"`` or ``"1us"``
    """
    micros = duration // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    if abs(micros) < 1000:
        return f"{micros}us"
    if abs(micros) < 1000000:
        return f"{micros / 1000:g}ms"
    return f"{micros / 1000000:g}s"
