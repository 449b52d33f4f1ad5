"""English amount-in-words for invoice captions."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from invoice_core.core.config import settings

Q2 = Decimal("0.01")
UPPER_LIMIT = 1_000_000_000

_BELOW_TWENTY = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]


class AmountOutOfRangeError(ValueError):
    """Integer part is beyond the supported range (>= one billion)."""

    def __init__(self, amount: object) -> None:
        self.amount = amount
        super().__init__(f"Number too large: {amount}")


def integer_to_words(n: int) -> str:
    """Spell out 0 <= n < 1,000,000,000. Zero yields an empty string."""
    if n < 0:
        raise ValueError(f"Amount must be non-negative: {n}")
    if n < 20:
        return _BELOW_TWENTY[n]
    if n < 100:
        return _TENS[n // 10] + (f" {_BELOW_TWENTY[n % 10]}" if n % 10 else "")
    if n < 1000:
        rest = n % 100
        return f"{_BELOW_TWENTY[n // 100]} Hundred" + (f" and {integer_to_words(rest)}" if rest else "")
    if n < 1_000_000:
        rest = n % 1000
        return f"{integer_to_words(n // 1000)} Thousand" + (f", {integer_to_words(rest)}" if rest else "")
    if n < UPPER_LIMIT:
        rest = n % 1_000_000
        return f"{integer_to_words(n // 1_000_000)} Million" + (f", {integer_to_words(rest)}" if rest else "")
    raise AmountOutOfRangeError(n)


def _to_amount(amount: int | float | Decimal | str) -> Decimal:
    if isinstance(amount, bool):
        raise ValueError(f"Not a monetary amount: {amount!r}")
    try:
        value = Decimal(str(amount))
    except InvalidOperation as exc:
        raise ValueError(f"Not a monetary amount: {amount!r}") from exc
    if not value.is_finite():
        raise ValueError(f"Not a monetary amount: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must be non-negative: {amount}")
    # Checked before quantize, which fails past the context precision
    if value >= UPPER_LIMIT:
        raise AmountOutOfRangeError(amount)
    return value.quantize(Q2, rounding=ROUND_HALF_UP)


def amount_to_words(amount: int | float | Decimal | str) -> str:
    """Convert a non-negative amount to words, e.g. 1234.56 ->
    ``"One Thousand, Two Hundred and Thirty Four and 56/100"``.

    The amount is rounded half-up to cents. Cents are not spelled out.

    Raises:
        AmountOutOfRangeError: integer part is one billion or more.
        ValueError: amount is negative or not a number.
    """
    value = _to_amount(amount)
    if value == 0:
        return "Zero"

    integer = int(value)
    fraction = int((value - integer) * 100)

    words = integer_to_words(integer)
    if fraction:
        words = f"{words} and {fraction}/100".strip()
    return words


def amount_in_words_caption(
    amount: int | float | Decimal | str,
    currency: str | None = None,
) -> str:
    """Footer caption, e.g. ``"One Hundred Riyals Only"``."""
    return f"{amount_to_words(amount)} {currency or settings.CURRENCY_NAME} Only"
