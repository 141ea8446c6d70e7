"""Currency annotation API.

Thin layer over currencyidentity that adds pycountry's ISO 4217 table as an
optional source of active codes.
"""

from functools import lru_cache
from typing import AbstractSet, Dict, FrozenSet, Optional
import logging

try:
    import pycountry
except ImportError as e:
    raise ImportError("pycountry not installed. pip install pycountry") from e

from annotationidentity.currencies.currencyidentity import (
    check_currency_shape,
    validate_currency,
)
from annotationidentity.errors import CurrencyError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def iso4217_codes() -> FrozenSet[str]:
    """Alphabetic ISO 4217 codes known to the installed pycountry.

    Returns a frozenset so the cached value cannot be mutated by callers.

    Examples:
        >>> "USD" in iso4217_codes()
        True
    """
    codes = frozenset(
        c.alpha_3 for c in pycountry.currencies if getattr(c, "alpha_3", None)
    )
    logger.info(f"Loaded {len(codes)} ISO 4217 codes from pycountry")
    return codes


def currency_identifier(code: str) -> Optional[Dict[str, str]]:
    """Look up an ISO 4217 code.

    Only exact, well-formed codes resolve; there is no fuzzy matching, since
    currency annotations are checked, not guessed.

    Args:
        code: Alphabetic code (e.g., "EUR")

    Returns:
        {"code": "EUR", "name": "Euro", "numeric": "978"} or None

    Examples:
        >>> currency_identifier("EUR")
        {'code': 'EUR', 'name': 'Euro', 'numeric': '978'}
        >>> currency_identifier("eur") is None
        True
    """
    try:
        check_currency_shape(code)
    except CurrencyError:
        return None

    currency = pycountry.currencies.get(alpha_3=code)
    if currency is None:
        return None

    return {
        "code": currency.alpha_3,
        "name": getattr(currency, "name", ""),
        "numeric": getattr(currency, "numeric", ""),
    }


def is_active_currency(code: str, active_codes: Optional[AbstractSet[str]] = None) -> bool:
    """True when ``code`` passes validate_currency.

    Args:
        code: Candidate code
        active_codes: Active code set (default: iso4217_codes())
    """
    if active_codes is None:
        active_codes = iso4217_codes()
    try:
        validate_currency(code, active_codes)
    except CurrencyError:
        return False
    return True


__all__ = [
    "validate_currency",
    "iso4217_codes",
    "currency_identifier",
    "is_active_currency",
]
