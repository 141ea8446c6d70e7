"""
Currency Code Validation
------------------------

Two-stage check for the payload of ``currency:`` annotations:

  1) shape: exactly three characters, each an uppercase Latin letter A-Z
  2) membership: the code is in a caller-supplied set of active codes

The active set is always supplied by the caller. ISO 4217 changes over time
(codes are withdrawn, reserved, or added), so nothing here embeds or caches
it; ``currencyapi.iso4217_codes()`` offers pycountry's copy for callers who
want a default.

Examples:
  >>> validate_currency("USD", {"USD", "EUR"})
  'USD'
  >>> validate_currency("usd", {"USD", "EUR"})
  ShapeError: currency code must be uppercase A-Z at offset 0
  >>> validate_currency("ZZZ", {"USD", "EUR"})
  UnknownCodeError: 'ZZZ' is not an active currency code
"""

from __future__ import annotations
from typing import AbstractSet, Optional

from annotationidentity.errors import ShapeError, UnknownCodeError


CODE_LENGTH = 3


def _first_bad_letter(code: str) -> Optional[int]:
    for i, ch in enumerate(code):
        if not ("A" <= ch <= "Z"):
            return i
    return None


def check_currency_shape(code: str) -> str:
    """Check that ``code`` looks like an ISO 4217 alphabetic code.

    Args:
        code: Candidate code (e.g., "USD")

    Returns:
        The code, unchanged

    Raises:
        ShapeError: wrong length, or a character outside A-Z
    """
    if not isinstance(code, str):
        raise TypeError(f"currency code must be str, got {type(code).__name__}")

    if len(code) != CODE_LENGTH:
        raise ShapeError(
            f"currency code must be exactly {CODE_LENGTH} letters, got {len(code)}",
            code,
            min(len(code), CODE_LENGTH),
        )

    bad = _first_bad_letter(code)
    if bad is not None:
        ch = code[bad]
        if "a" <= ch <= "z":
            reason = "currency code must be uppercase A-Z"
        else:
            reason = f"unexpected character {ch!r} in currency code; expected A-Z"
        raise ShapeError(reason, code, bad)

    return code


def validate_currency(code: str, active_codes: AbstractSet[str]) -> str:
    """Validate a currency code against its shape and an active code set.

    Args:
        code: Candidate code (e.g., "USD")
        active_codes: Caller-owned set of active ISO 4217 codes. Read only;
                      never retained after the call.

    Returns:
        The validated code

    Raises:
        ShapeError: malformed code (checked first)
        UnknownCodeError: well-formed but not in ``active_codes``
    """
    check_currency_shape(code)

    if code not in active_codes:
        raise UnknownCodeError(f"'{code}' is not an active currency code", code)

    return code


__all__ = [
    "CODE_LENGTH",
    "check_currency_shape",
    "validate_currency",
]
