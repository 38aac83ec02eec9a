"""Human-readable formatters for frequency and level values.

This module converts raw numbers into the labels shown on plots and
in the CLI status line: frequencies with unit suffixes, dB levels,
frequency resolution and dB axis ticks.
"""

import math
from typing import Optional, Union

# Frequency thresholds
_ONE_KHZ: int = 1_000
_ONE_MHZ: int = 1_000_000
_ONE_GHZ: int = 1_000_000_000


def format_frequency(value: Optional[Union[int, float]]) -> str:
    """Format a frequency in Hz to a human-readable string.

    * ``None`` or negative → ``""``
    * < 1 KHz → ``"<n> Hz"`` (whole hertz)
    * < 1 MHz → ``"<n> KHz"``
    * < 1 GHz → ``"<n> MHz"``
    * ≥ 1 GHz → ``"<n> GHz"``

    Scaled values keep at most one decimal place with trailing zeros
    and unnecessary decimal points stripped.

    Args:
        value: Frequency in Hz, or ``None``.

    Returns:
        Formatted string, or ``""`` for ``None`` / negative values.
    """
    if value is None:
        return ""

    float_val = float(value)
    if math.isnan(float_val) or float_val < 0:
        return ""

    if float_val < _ONE_KHZ:
        return f"{int(float_val)} Hz"

    if float_val < _ONE_MHZ:
        return f"{_format_decimal(float_val / _ONE_KHZ)} KHz"

    if float_val < _ONE_GHZ:
        return f"{_format_decimal(float_val / _ONE_MHZ)} MHz"

    return f"{_format_decimal(float_val / _ONE_GHZ)} GHz"


def format_level(value: Optional[float]) -> str:
    """Format a level in dB to a 2-decimal string.

    * ``None`` or ``NaN`` → ``""``
    * Otherwise → formatted to 2 decimal places (e.g. ``"-6.02"``)

    Args:
        value: Level in dB, or ``None``.

    Returns:
        Formatted string, or ``""`` for ``None`` / ``NaN``.
    """
    if value is None or math.isnan(value):
        return ""
    return f"{value:.2f}"


def format_resolution(bin_width_hz: float) -> str:
    """Format a bin width as ``"<n> Hz"`` with one decimal place."""
    return f"{bin_width_hz:.1f} Hz"


def format_db_tick(value: float) -> str:
    """Format a dB axis tick as a whole number, e.g. ``"-20 dB"``."""
    return f"{round(value)} dB"


def _format_decimal(value: float) -> str:
    """Format a float with up to 1 decimal place.

    Args:
        value: The number to format.

    Returns:
        Formatted string (e.g. ``"10"`` or ``"10.1"``).
    """
    # Format to 1 decimal place, then strip trailing zero + dot
    formatted = f"{value:.1f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted
