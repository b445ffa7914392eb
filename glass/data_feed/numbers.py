"""Tolerant numeric parsing and display formatting.

Source payloads deliver numbers as JSON numbers, numeric strings, ``null`` or
garbage. Everything here degrades to a caller-supplied default instead of
raising, which is what lets the normalizers promise they never throw.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

# enough digits to quantize any finite float to a few fraction digits
_GROUPED_PRECISION = 400


def to_float(value: Any, default: float = 0.0) -> float:
    """Parse ``value`` as a finite float, returning ``default`` otherwise."""

    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result


def to_int(value: Any, default: int = 0) -> int:
    """Parse ``value`` as an integer (floats are truncated)."""

    parsed = to_float(value, float("nan"))
    if math.isnan(parsed):
        return default
    return int(parsed)


def round_half_up(value: float) -> int:
    """Round halves away from zero for positives (``2.5 -> 3``), unlike :func:`round`."""

    return int(math.floor(value + 0.5))


def _strip_negative_zero(text: str) -> str:
    if text.startswith("-") and not any(ch not in "-0.," for ch in text):
        return text[1:]
    return text


def format_fixed(value: float, decimals: int) -> str:
    """Fixed-point text with ``decimals`` digits (``25 -> "25.00"``)."""

    return _strip_negative_zero(f"{value:.{decimals}f}")


def format_grouped(value: float, max_fraction_digits: int = 3) -> str:
    """en-US grouped number text (``500000 -> "500,000"``, ``1234.5 -> "1,234.5"``).

    The shortest decimal form of ``value`` is rounded half away from zero, so
    ``1234.0005`` becomes ``"1,234.001"`` rather than the binary-float result.
    """

    with localcontext() as ctx:
        ctx.prec = _GROUPED_PRECISION
        exact = Decimal(repr(value))
        quantized = exact.quantize(Decimal(1).scaleb(-max_fraction_digits), rounding=ROUND_HALF_UP)
    text = f"{quantized:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return _strip_negative_zero(text)


def format_compact_volume(value: float) -> str:
    """Compact volume label: ``1.5M``, ``12.3K`` or a rounded integer."""

    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(round_half_up(value))


__all__ = [
    "format_compact_volume",
    "format_fixed",
    "format_grouped",
    "round_half_up",
    "to_float",
    "to_int",
]
