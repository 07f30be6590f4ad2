"""Number parsing and money helpers.

SDK layer - converts locale-formatted text into exact decimals and
formats results for display. Engine code works on Decimal only.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Values beyond 10**MAX_EXPONENT (or below 10**-MAX_EXPONENT) count as unparsable
MAX_EXPONENT = 100


def parse_de_number(value: Any) -> Decimal:
    """Parse a German-formatted number tolerantly.

    Dots are thousands separators and the first comma is the decimal
    separator. Whitespace is ignored. Anything that cannot be parsed
    yields 0 instead of raising.

    Examples:
        "1.234,56" -> Decimal("1234.56")
        "12,5"     -> Decimal("12.5")
        ""         -> Decimal("0")
        "abc"      -> Decimal("0")
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return _bounded(value)
    if isinstance(value, (int, float)):
        return to_decimal(value)

    normalized = "".join(str(value).split()).replace(".", "").replace(",", ".", 1)
    if not normalized:
        return ZERO
    try:
        parsed = Decimal(normalized)
    except InvalidOperation:
        return ZERO
    return _bounded(parsed)


def to_decimal(value: Any) -> Decimal:
    """Convert a plain number to Decimal without binary float noise.

    Floats go through str() so 38.03 becomes Decimal("38.03").
    Strings are handed to parse_de_number.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return _bounded(value)
    if isinstance(value, int):
        return _bounded(Decimal(value))
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return ZERO
        return _bounded(Decimal(str(value)))
    return parse_de_number(value)


def _bounded(value: Decimal) -> Decimal:
    """0 for non-finite values and magnitudes no calculation can carry."""
    if not value.is_finite():
        return ZERO
    if value and abs(value.adjusted()) > MAX_EXPONENT:
        return ZERO
    return value


def non_negative(value: Any) -> Decimal:
    """Parse a value and clamp it at zero."""
    return max(ZERO, parse_de_number(value))


def clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    """Clamp value into [low, high]. high wins when the range is empty."""
    return min(high, max(low, value))


def round_cents(amount: Decimal) -> Decimal:
    """Round to cents, half up (presentation rounding)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_eur(amount: Decimal) -> str:
    """Format an amount as de-DE currency, e.g. '7.992,00 €'."""
    rounded = round_cents(amount)
    text = f"{rounded:,.2f}"  # 7,992.00
    text = text.replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    return f"{text} €"


def format_hours(hours: Decimal) -> str:
    """Format hours with two decimals and a decimal comma, e.g. '12,50 h'."""
    return f"{round_cents(hours):.2f}".replace(".", ",") + " h"
