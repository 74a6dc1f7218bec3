from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY = "GBP"
_PENNY = Decimal("0.01")


class InvalidAmountError(ValueError):
    pass


@dataclass(frozen=True, order=True)
class Money:
    amount_pence: int
    currency: str = CURRENCY

    def __post_init__(self) -> None:
        if self.amount_pence < 0:
            raise ValueError("amount_pence must be >= 0")
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise ValueError("currency must be a 3-letter uppercase code")

    @classmethod
    def zero(cls) -> Money:
        return cls(amount_pence=0)

    @classmethod
    def from_decimal(cls, value: Decimal | str | int | float) -> Money:
        return cls(amount_pence=to_pence(value))

    def __add__(self, other: Money) -> Money:
        self._check_currency(other)
        return Money(amount_pence=self.amount_pence + other.amount_pence, currency=self.currency)

    def times(self, quantity: int) -> Money:
        return Money(amount_pence=self.amount_pence * quantity, currency=self.currency)

    def apply_rate(self, rate: Decimal) -> Money:
        """Return ``self * rate`` rounded half-up to the penny."""
        raw = Decimal(self.amount_pence) * rate
        return Money(
            amount_pence=int(raw.quantize(Decimal(1), rounding=ROUND_HALF_UP)),
            currency=self.currency,
        )

    def to_decimal(self) -> Decimal:
        return (Decimal(self.amount_pence) / 100).quantize(_PENNY)

    def format(self) -> str:
        return format_pence(self.amount_pence)

    def _check_currency(self, other: Money) -> None:
        if other.currency != self.currency:
            raise ValueError("cannot combine amounts in different currencies")


def to_pence(value: Decimal | str | int | float) -> int:
    """Convert a pounds amount with at most two decimal places to pence.

    Floats go through ``str`` first so ``10.1`` becomes ``1010`` and not
    ``1009.9999``.
    """
    try:
        amount = Decimal(str(value)) if not isinstance(value, Decimal) else value
    except InvalidOperation as exc:
        raise InvalidAmountError(f"not a monetary amount: {value!r}") from exc
    if not amount.is_finite():
        raise InvalidAmountError(f"not a monetary amount: {value!r}")
    if amount != amount.quantize(_PENNY):
        raise InvalidAmountError(f"amount has more than 2 decimal places: {value!r}")
    return int(amount * 100)


def format_pence(pence: int) -> str:
    sign = "-" if pence < 0 else ""
    pounds, remainder = divmod(abs(pence), 100)
    return f"{sign}£{pounds}.{remainder:02d}"
