"""Public API for unit annotations.

This module provides the entry points for parsing, validating and comparing
the payload of ``unit:`` annotations.

Key Design Principles:
1. Closed grammar: anything outside the symbol tables is rejected
2. Errors point at the offending character
3. Equivalence is decided on canonical dimension vectors, never on text
4. No numeric conversion between units
"""

from typing import Any, Dict, Optional, Tuple, Union

import pandas as pd

from annotationidentity.errors import UnitError
from annotationidentity.units.unitexpr import UnitExpr
from annotationidentity.units.unitnorm import (
    CanonicalUnit,
    DimensionVector,
    Scale,
    base_decomposition,
    canonicalize,
    load_unit_catalog,
)
from annotationidentity.units.unitparse import parse_unit
from annotationidentity.units.unitsymbols import (
    BYTE_SYMBOL,
    TURN_SYMBOL,
    BinaryPrefix,
    MetricPrefix,
    MetricSymbol,
)


UnitLike = Union[str, UnitExpr, CanonicalUnit]


def canonicalize_unit(
    unit: Union[str, UnitExpr],
    *,
    allow_chained_division: bool = True,
) -> CanonicalUnit:
    """Canonicalize a unit string or parsed expression.

    Args:
        unit: Unit payload (e.g., "m/s²") or a UnitExpr from parse_unit
        allow_chained_division: Passed to parse_unit when ``unit`` is a string

    Returns:
        CanonicalUnit

    Raises:
        LexError, UnitSyntaxError: if ``unit`` is a string that fails to parse

    Examples:
        >>> canonicalize_unit("s⋅m").text
        'm⋅s'
        >>> canonicalize_unit("m/s²") == canonicalize_unit("m⋅s⁻²")
        True
        >>> canonicalize_unit("m/m").is_dimensionless
        True
    """
    if isinstance(unit, str):
        unit = parse_unit(unit, allow_chained_division=allow_chained_division)
    return canonicalize(unit)


def _as_canonical(unit: UnitLike) -> CanonicalUnit:
    if isinstance(unit, CanonicalUnit):
        return unit
    return canonicalize_unit(unit)


def unit_identifier(text: str) -> Optional[str]:
    """Get the canonical text of a unit expression, or None if invalid.

    Examples:
        >>> unit_identifier("s⁻¹⋅m")
        'm⋅s⁻¹'
        >>> unit_identifier("m//s") is None
        True
    """
    try:
        return canonicalize_unit(text).text
    except UnitError:
        return None


def validate_unit(
    text: str,
    *,
    allow_chained_division: bool = True,
) -> Dict[str, Any]:
    """Validate a unit expression without raising.

    Useful for linters that report every bad annotation in a file rather
    than stopping at the first one.

    Args:
        text: Unit payload (without the ``unit:`` prefix)
        allow_chained_division: See parse_unit

    Returns:
        Dictionary with validation result:
        {
            "valid": bool,
            "canonical": Optional[str],   # canonical text when valid
            "error": Optional[str],       # error class name when invalid
            "production": Optional[str],  # grammar production that failed
            "offset": Optional[int],      # character offset of the problem
            "message": str                # human-readable message
        }

    Examples:
        >>> validate_unit("m/s²")
        {'valid': True, 'canonical': 'm⋅s⁻²', 'error': None, 'production': None,
         'offset': None, 'message': 'Valid unit expression'}

        >>> validate_unit("m⁰")["error"]
        'LexError'
    """
    try:
        canonical = canonicalize_unit(text, allow_chained_division=allow_chained_division)
    except UnitError as e:
        return {
            "valid": False,
            "canonical": None,
            "error": type(e).__name__,
            "production": e.production,
            "offset": e.offset,
            "message": e.reason,
        }

    return {
        "valid": True,
        "canonical": canonical.text,
        "error": None,
        "production": None,
        "offset": None,
        "message": "Valid unit expression",
    }


def units_equivalent(a: UnitLike, b: UnitLike) -> bool:
    """True when two units have equal dimension vectors and equal scale.

    Examples:
        >>> units_equivalent("m⋅s", "s⋅m")
        True
        >>> units_equivalent("km", "m")
        False
        >>> units_equivalent("km/m", "mm/μm")
        True
    """
    ca = _as_canonical(a)
    cb = _as_canonical(b)
    return ca.dims == cb.dims and ca.scale == cb.scale


def base_dimensions(unit: UnitLike) -> Tuple[DimensionVector, Scale]:
    """Decompose a unit into SI base symbols.

    Derived symbols are expanded using the unit catalog; rad, sr, B and τ are
    kept as themselves. The caller decides what the result means in terms of
    physical quantities.

    Examples:
        >>> dims, scale = base_dimensions("N")
        >>> dims == base_dimensions("kg⋅m⋅s⁻²")[0]
        True
        >>> base_dimensions("J/s") == base_dimensions("W")
        True
    """
    return base_decomposition(_as_canonical(unit))


def list_units(kind: Optional[str] = None) -> pd.DataFrame:
    """List every unit symbol the grammar accepts.

    Args:
        kind: Optional filter: "base", "derived", "binary" or "other"

    Returns:
        DataFrame with columns symbol, kind, name, quantity, prefixes

    Examples:
        >>> list_units(kind="base")["symbol"].tolist()
        ['s', 'm', 'g', 'A', 'K', 'mol', 'cd']
    """
    catalog = load_unit_catalog()
    symbols = catalog["symbols"]

    rows = []
    for symbol in MetricSymbol:
        entry = symbols.get(symbol.value, {})
        rows.append({
            "symbol": symbol.value,
            "kind": "base" if symbol.is_base else "derived",
            "name": entry.get("name"),
            "quantity": entry.get("quantity"),
            "prefixes": "metric",
        })
    for symbol, symbol_kind, prefixes in ((BYTE_SYMBOL, "binary", "binary"), (TURN_SYMBOL, "other", None)):
        entry = symbols.get(symbol, {})
        rows.append({
            "symbol": symbol,
            "kind": symbol_kind,
            "name": entry.get("name"),
            "quantity": entry.get("quantity"),
            "prefixes": prefixes,
        })

    df = pd.DataFrame(rows, columns=["symbol", "kind", "name", "quantity", "prefixes"])
    if kind is not None:
        df = df[df["kind"] == kind].reset_index(drop=True)
    return df


def list_prefixes(kind: Optional[str] = None) -> pd.DataFrame:
    """List metric and binary prefixes.

    Args:
        kind: Optional filter: "metric" or "binary"

    Returns:
        DataFrame with columns prefix, kind, name, base, power
        (the prefix multiplies by ``base ** power``)

    Examples:
        >>> list_prefixes(kind="binary")[["prefix", "power"]].values[0].tolist()
        ['Ki', 10]
    """
    names = load_unit_catalog()["prefixes"]

    rows = [
        {"prefix": p.value, "kind": "metric", "name": names.get(p.value), "base": 10, "power": p.power}
        for p in MetricPrefix
    ]
    rows += [
        {"prefix": p.value, "kind": "binary", "name": names.get(p.value), "base": 2, "power": p.power}
        for p in BinaryPrefix
    ]

    df = pd.DataFrame(rows, columns=["prefix", "kind", "name", "base", "power"])
    if kind is not None:
        df = df[df["kind"] == kind].reset_index(drop=True)
    return df


__all__ = [
    "parse_unit",
    "canonicalize_unit",
    "unit_identifier",
    "validate_unit",
    "units_equivalent",
    "base_dimensions",
    "list_units",
    "list_prefixes",
]
