"""Currency code validation for ``currency:`` annotations."""

from annotationidentity.currencies.currencyapi import (
    validate_currency,
    iso4217_codes,
    currency_identifier,
    is_active_currency,
)

__all__ = [
    "validate_currency",
    "iso4217_codes",
    "currency_identifier",
    "is_active_currency",
]
