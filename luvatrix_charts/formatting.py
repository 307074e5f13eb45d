from __future__ import annotations

from decimal import Decimal
import math
from typing import Iterable

from luvatrix_charts.errors import BadTickPlacement


# Returned by sigdigit(0); lower than any exponent a finite float can have.
SIGDIGIT_ZERO = -(2**31)

# Exponents inside this range are written out as plain decimals.
PLAIN_EXPONENT_RANGE = (-2, 3)

_SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"

TickModifiers = tuple[float, int, int]


def sigdigit(value: float) -> int:
    """Return the base-10 exponent of the most significant digit of ``|value|``.

    ``sigdigit(999) == 2`` and ``sigdigit(0.05) == -2``. Zero has no significant
    digit and maps to :data:`SIGDIGIT_ZERO`.
    """
    num = abs(float(value))
    if num == 0.0:
        return SIGDIGIT_ZERO
    if not math.isfinite(num):
        raise ValueError(f"sigdigit requires a finite value, got {value!r}")
    exponent = 0
    if num > 1.0:
        while num >= 10.0:
            num /= 10.0
            exponent += 1
    else:
        while num < 1.0:
            num *= 10.0
            exponent -= 1
    return exponent


def superscript(n: int) -> str:
    if n < 0:
        raise ValueError("superscript requires a non-negative integer")
    if n >= 10:
        return superscript(n // 10) + superscript(n % 10)
    return _SUPERSCRIPT_DIGITS[n]


def tick_modifiers(ticks: Iterable[float]) -> TickModifiers:
    """Derive the shared ``(offset, multiplier, precision)`` for a set of ticks.

    The offset is subtracted from every tick before display when the ticks sit
    far from zero relative to their spacing, the multiplier is the power of ten
    factored out of the labels (0 for plain decimals), and the precision is the
    number of fixed decimals needed so that no label loses a nonzero digit.
    """
    values = _checked_values(ticks)
    if not values:
        return (0.0, 0, 0)

    ordered = sorted(values)
    candidate = sigdigit(max(ordered, key=abs))
    max_gap = max((b - a for a, b in zip(ordered, ordered[1:])), default=0.0)
    gap_exponent = sigdigit(max_gap) if max_gap != 0.0 else candidate
    if gap_exponent == SIGDIGIT_ZERO:
        # every tick is zero
        gap_exponent = 0

    offset = 0.0
    if candidate != SIGDIGIT_ZERO and gap_exponent < candidate - 3:
        offset = ordered[0]

    residual = max(abs(v - offset) for v in ordered)
    exponent = sigdigit(_round_to(residual, 3 - gap_exponent))
    low, high = PLAIN_EXPONENT_RANGE
    if exponent == SIGDIGIT_ZERO or low <= exponent <= high:
        multiplier = 0
    else:
        multiplier = exponent

    if multiplier != 0 or exponent < 0:
        max_precision = 3
    else:
        max_precision = 3 - exponent
    scale = 10.0 ** (-multiplier)
    precision = max(_decimals_needed((v - offset) * scale, max_precision) for v in ordered)
    return (offset, multiplier, precision)


def ticks_to_labels(ticks: Iterable[float], modifiers: TickModifiers) -> list[str]:
    values = _checked_values(ticks)
    if not values:
        return []
    offset, multiplier, precision = modifiers
    labels: list[str] = []
    for value in sorted(values):
        shifted = _round_to(value - offset, 4 - multiplier)
        if multiplier != 0:
            shifted = _round_to(shifted * 10.0 ** (3 - multiplier), 0) * 1e-3
        labels.append(_fixed(shifted, precision))
    return labels


def modifier_text(multiplier: int, offset: float) -> str:
    """Text of the scale annotation drawn next to an axis, e.g. ``"×10⁶ + 5"``."""
    parts: list[str] = []
    if multiplier != 0:
        exponent = superscript(multiplier) if multiplier > 0 else "⁻" + superscript(-multiplier)
        parts.append(f"×10{exponent}")
    if offset != 0.0:
        sign = "+" if offset > 0 else "-"
        parts.append(f"{sign} {format_offset(abs(offset))}")
    return " ".join(parts)


def format_offset(value: float) -> str:
    out = format(Decimal(repr(float(value))).normalize(), "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return out


def _checked_values(ticks: Iterable[float]) -> list[float]:
    values = [float(t) for t in ticks]
    if any(math.isnan(v) for v in values):
        raise BadTickPlacement("tick is NaN")
    if any(math.isinf(v) for v in values):
        raise BadTickPlacement("tick is infinite")
    return values


def _round_to(num: float, place: int) -> float:
    # half away from zero
    place = max(-300, min(300, place))
    if place >= 0:
        scale = 10.0**place
        scaled = abs(num) * scale
        if not math.isfinite(scaled):
            return num
        return math.copysign(math.floor(scaled + 0.5), num) / scale
    factor = 10.0 ** (-place)
    return math.copysign(math.floor(abs(num) / factor + 0.5), num) * factor


def _decimals_needed(value: float, max_precision: int) -> int:
    scaled = int(math.floor(abs(value) * 10.0**max_precision + 0.5))
    if scaled == 0:
        return 0
    digits = max_precision
    while digits > 0 and scaled % 10 == 0:
        scaled //= 10
        digits -= 1
    return digits


def _fixed(value: float, precision: int) -> str:
    out = f"{value:.{precision}f}"
    if out.startswith("-") and out[1:].strip("0.") == "":
        out = out[1:]
    return out
