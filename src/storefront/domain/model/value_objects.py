"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

CENT = Decimal("0.01")

# Largest count a 32-bit INTEGER column holds; applies to quantities and stock.
MAX_QUANTITY = 2_147_483_647


@dataclass(frozen=True)
class Money:
    """Non-negative fixed-point amount in the store currency.

    Amounts are quantised to cents on construction, so ``Money.of("7")``
    and ``Money.of("7.00")`` compare equal.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        object.__setattr__(
            self, "amount", self.amount.quantize(CENT, rounding=ROUND_HALF_UP)
        )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        return self.amount >= other.amount

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")
        if self.value > MAX_QUANTITY:
            raise ValidationError(f"Quantity cannot exceed {MAX_QUANTITY}, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
