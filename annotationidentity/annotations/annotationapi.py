"""Type-name annotation dispatch.

An ``annotated<T, dns-name-or-none, type-name>`` declaration carries a
type-name such as ``unit:m/s²`` or ``currency:EUR``. Most type-names are
uninterpreted strings; the two families with a grammar are checked here:

  - ``unit:<unit>`` and ``math:angle:<unit>`` -> unit expression
  - ``currency:<code>``                       -> ISO 4217 code

Errors raised from a payload are re-anchored so their offset points into the
full type-name, not just the payload.
"""

from typing import AbstractSet, Any, Dict, Optional
import logging
import warnings

from annotationidentity.currencies.currencyapi import iso4217_codes
from annotationidentity.currencies.currencyidentity import validate_currency
from annotationidentity.errors import AnnotationError
from annotationidentity.units.unitapi import canonicalize_unit

logger = logging.getLogger(__name__)


UNIT_PREFIXES = ("unit:", "math:angle:")
CURRENCY_PREFIX = "currency:"

# Earlier drafts of the convention used these spellings
LEGACY_PREFIXES = {
    "units:": "unit:",
}


def parse_annotation(
    type_name: str,
    *,
    active_codes: Optional[AbstractSet[str]] = None,
    allow_chained_division: bool = True,
) -> Dict[str, Any]:
    """Parse and check a type-name annotation.

    Args:
        type_name: Full type-name (e.g., "unit:m/s²", "currency:USD")
        active_codes: Active currency codes (default: iso4217_codes())
        allow_chained_division: See parse_unit

    Returns:
        Dictionary describing the annotation:
        {
            "kind": "unit" | "currency" | "opaque",
            "namespace": str,          # e.g. "unit:", "" for opaque
            "payload": str,            # text after the namespace
            "canonical": Optional[str] # canonical unit text / currency code
            "unit": Optional[CanonicalUnit]
        }

    Raises:
        LexError, UnitSyntaxError: bad unit payload (offset into type_name)
        ShapeError, UnknownCodeError: bad currency payload
        TypeError: type_name is not a str

    Examples:
        >>> parse_annotation("unit:s⋅m")["canonical"]
        'm⋅s'
        >>> parse_annotation("currency:EUR")["kind"]
        'currency'
        >>> parse_annotation("schema:Person.email")["kind"]
        'opaque'
    """
    if not isinstance(type_name, str):
        raise TypeError(f"type-name must be str, got {type(type_name).__name__}")

    for legacy, current in LEGACY_PREFIXES.items():
        if type_name.startswith(legacy):
            warnings.warn(
                f"The '{legacy}' annotation prefix is deprecated; use '{current}'",
                DeprecationWarning,
                stacklevel=2,
            )
            return _parse_unit_annotation(type_name, legacy, allow_chained_division)

    for prefix in UNIT_PREFIXES:
        if type_name.startswith(prefix):
            return _parse_unit_annotation(type_name, prefix, allow_chained_division)

    if type_name.startswith(CURRENCY_PREFIX):
        if active_codes is None:
            active_codes = iso4217_codes()
        payload = type_name[len(CURRENCY_PREFIX):]
        try:
            code = validate_currency(payload, active_codes)
        except AnnotationError as e:
            raise e.shifted(len(CURRENCY_PREFIX), type_name) from e
        return {
            "kind": "currency",
            "namespace": CURRENCY_PREFIX,
            "payload": payload,
            "canonical": code,
            "unit": None,
        }

    logger.debug(f"Passing through uninterpreted annotation {type_name!r}")
    return {
        "kind": "opaque",
        "namespace": "",
        "payload": type_name,
        "canonical": None,
        "unit": None,
    }


def _parse_unit_annotation(
    type_name: str,
    prefix: str,
    allow_chained_division: bool,
) -> Dict[str, Any]:
    payload = type_name[len(prefix):]
    try:
        canonical = canonicalize_unit(payload, allow_chained_division=allow_chained_division)
    except AnnotationError as e:
        raise e.shifted(len(prefix), type_name) from e

    logger.debug(f"Unit annotation {type_name!r} -> {canonical.text!r}")
    return {
        "kind": "unit",
        "namespace": LEGACY_PREFIXES.get(prefix, prefix),
        "payload": payload,
        "canonical": canonical.text,
        "unit": canonical,
    }


def validate_annotation(
    type_name: str,
    *,
    active_codes: Optional[AbstractSet[str]] = None,
    allow_chained_division: bool = True,
) -> Dict[str, Any]:
    """Non-raising form of parse_annotation, for linting declarations.

    Returns:
        {"valid": bool, "kind": Optional[str], "error": Optional[str],
         "offset": Optional[int], "message": str}

    Examples:
        >>> validate_annotation("currency:usd")
        {'valid': False, 'kind': None, 'error': 'ShapeError', 'offset': 9,
         'message': 'currency code must be uppercase A-Z'}
    """
    try:
        result = parse_annotation(
            type_name,
            active_codes=active_codes,
            allow_chained_division=allow_chained_division,
        )
    except AnnotationError as e:
        return {
            "valid": False,
            "kind": None,
            "error": type(e).__name__,
            "offset": e.offset,
            "message": e.reason,
        }

    return {
        "valid": True,
        "kind": result["kind"],
        "error": None,
        "offset": None,
        "message": "Valid annotation",
    }


__all__ = [
    "parse_annotation",
    "validate_annotation",
    "UNIT_PREFIXES",
    "CURRENCY_PREFIX",
]
