"""
Money value object for monetary amounts returned by the Storefront API.

Amounts stay as the decimal strings Shopify sends, so no precision is lost
between the upstream payload and the JSON handed to the UI layer.
"""

from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Money(BaseModel):
    """
    Immutable value object representing a monetary amount with currency.

    Attributes:
        amount: Non-negative decimal string (e.g., "19.99")
        currency_code: ISO 4217 currency code (e.g., "USD")

    Example:
        >>> price = Money(amount="99.99", currencyCode="USD")
        >>> price.as_decimal
        Decimal('99.99')
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    amount: str
    currency_code: str

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        """Accept numbers but keep the decimal string representation."""
        if isinstance(v, (int, float, Decimal)):
            v = str(v)
        try:
            value = Decimal(v)
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Invalid money amount: {v!r}") from e

        if not value.is_finite():
            raise ValueError(f"Invalid money amount: {v!r}")
        if value < 0:
            raise ValueError(f"Money amount cannot be negative: {v}")
        return v

    @field_validator("currency_code")
    @classmethod
    def validate_currency_code(cls, v):
        if not v or len(v) != 3 or not v.isalpha():
            raise ValueError(f"Invalid currency code: {v}")
        return v.upper()

    def __str__(self) -> str:
        return f"{self.currency_code} {self.amount}"

    @property
    def as_decimal(self) -> Decimal:
        return Decimal(self.amount)

    @property
    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.as_decimal == Decimal("0")

    @classmethod
    def zero(cls, currency_code: str = "USD") -> "Money":
        """Create a zero Money object, formatted the way Shopify omits tax."""
        return cls(amount="0.0", currency_code=currency_code)
