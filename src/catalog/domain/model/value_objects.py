"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from catalog.domain.exceptions import ValidationError

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
_CUSTOM_ID_RE = re.compile(r"^[A-Z]{3}[0-9]{6,}$")


@dataclass(frozen=True)
class ProductId:
    """Product identifier: either a UUID or three uppercase letters + 6+ digits.

    Build it with ``from_string`` or ``generate``; invalid input is rejected,
    never coerced.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("ProductId cannot be empty")
        if not (_UUID_RE.match(self.value) or _CUSTOM_ID_RE.match(self.value)):
            raise ValidationError(f"Invalid ProductId format: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def from_string(value: str) -> ProductId:
        return ProductId(value)

    @staticmethod
    def generate() -> ProductId:
        return ProductId(str(uuid.uuid4()))


@dataclass(frozen=True)
class Price:
    """Selling price with currency and an optional pre-discount amount.

    Uses Decimal like every other monetary value in the domain; the record
    mapper converts to and from JSON numbers at the boundary.
    """

    amount: Decimal
    currency: str
    original_amount: Decimal | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Price amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Price amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError("Price amount cannot be negative")
        if not isinstance(self.currency, str) or not self.currency.strip():
            raise ValidationError("Currency cannot be empty")
        if self.original_amount is not None:
            if not isinstance(self.original_amount, Decimal):
                raise ValidationError(
                    "Original price amount must be a Decimal, "
                    f"got {type(self.original_amount).__name__}"
                )
            if not self.original_amount.is_finite():
                raise ValidationError(
                    f"Original price amount must be finite, got {self.original_amount}"
                )
            if self.original_amount < Decimal("0"):
                raise ValidationError("Original price amount cannot be negative")
            if self.original_amount < self.amount:
                raise ValidationError(
                    "Original price cannot be less than current price"
                )

    @property
    def has_discount(self) -> bool:
        return self.original_amount is not None and self.original_amount > self.amount

    @property
    def discount_percentage(self) -> int:
        original = self.original_amount
        if original is None or original <= self.amount:
            return 0
        ratio = (original - self.amount) / original * 100
        return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def format(self) -> str:
        """Render as ``"ARS 1.234,50"``: dot thousands, comma decimals."""
        grouped = f"{self.amount:,.2f}"
        localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
        return f"{self.currency} {localized}"

    def __str__(self) -> str:
        return self.format()

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(
        amount: str | float | int | Decimal,
        currency: str,
        original_amount: str | float | int | Decimal | None = None,
    ) -> Price:
        """Convenient factory that coerces numbers to Decimal safely."""
        return Price(
            _to_decimal(amount),
            currency,
            None if original_amount is None else _to_decimal(original_amount),
        )


def _to_decimal(value: str | float | int | Decimal) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid price amount: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid price amount: {value!r}") from exc


@dataclass(frozen=True)
class ProductStock:
    """Units available for sale. Never negative, always a whole number."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Stock must be a whole number, got {type(self.value).__name__}"
            )
        if self.value < 0:
            raise ValidationError("Stock cannot be negative")

    @property
    def is_available(self) -> bool:
        return self.value > 0

    @property
    def is_empty(self) -> bool:
        return self.value == 0

    def has_stock(self, quantity: int = 1) -> bool:
        return self.value >= quantity

    def add(self, quantity: int) -> ProductStock:
        if quantity < 0:
            raise ValidationError("Cannot add negative quantity to stock")
        return ProductStock(self.value + quantity)

    def subtract(self, quantity: int) -> ProductStock:
        if quantity < 0:
            raise ValidationError("Cannot subtract negative quantity from stock")
        if quantity > self.value:
            raise ValidationError("Cannot subtract more than available stock")
        return ProductStock(self.value - quantity)

    def __str__(self) -> str:
        return str(self.value)

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def from_number(value: int | float) -> ProductStock:
        """Accept integral floats (``5.0``) as JSON parsers may produce them."""
        if isinstance(value, float):
            if value < 0:
                raise ValidationError("Stock cannot be negative")
            if not value.is_integer():
                raise ValidationError(f"Stock must be a whole number, got {value}")
            value = int(value)
        return ProductStock(value)

    @staticmethod
    def empty() -> ProductStock:
        return ProductStock(0)


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"
    DISCONTINUED = "discontinued"

    @staticmethod
    def from_string(value: str) -> ProductStatus:
        """Case-insensitive lookup, normalised to the lowercase value."""
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("ProductStatus cannot be empty")
        try:
            return ProductStatus(value.lower())
        except ValueError:
            valid = ", ".join(s.value for s in ProductStatus)
            raise ValidationError(
                f"Invalid ProductStatus: {value}. Valid statuses are: {valid}"
            ) from None

    @property
    def is_active(self) -> bool:
        return self is ProductStatus.ACTIVE

    def __str__(self) -> str:
        return self.value
