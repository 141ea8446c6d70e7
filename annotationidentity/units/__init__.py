"""Units module for ``unit:`` annotation payloads.

This module parses, validates and canonicalizes unit expressions such as
``m/s²``, ``kW⋅m⁻²`` or ``KiB/s``.

Public API:
    parse_unit(text) -> UnitExpr
        Parse a unit payload into an expression tree

    canonicalize_unit(unit) -> CanonicalUnit
        Canonical text, per-literal factors, dimension vector and scale

    validate_unit(text) -> dict
        Non-raising validation for linters

    units_equivalent(a, b) -> bool
        Compare two units by dimension vector and scale

    base_dimensions(unit) -> (DimensionVector, Scale)
        Expand derived symbols into SI base symbols

    list_units(kind) / list_prefixes(kind) -> DataFrame
        Browse the closed symbol tables

Key Principles:
1. The symbol and prefix sets are closed
2. Errors carry the offset of the offending character
3. No numeric unit conversion

Examples:
    >>> from annotationidentity.units import canonicalize_unit, units_equivalent
    >>>
    >>> canonicalize_unit("m/s²").text
    'm⋅s⁻²'
    >>> units_equivalent("m⋅s", "s⋅m")
    True
    >>> canonicalize_unit("m/m").text
    ''
"""

from .unitapi import (
    parse_unit,
    canonicalize_unit,
    unit_identifier,
    validate_unit,
    units_equivalent,
    base_dimensions,
    list_units,
    list_prefixes,
)
from .unitexpr import (
    BinaryLiteral,
    Factor,
    Group,
    MetricLiteral,
    OtherLiteral,
    Product,
    Quotient,
)
from .unitnorm import (
    CanonicalUnit,
    DimensionVector,
    Scale,
)
from .unitsymbols import (
    BinaryPrefix,
    MetricPrefix,
    MetricSymbol,
)

__all__ = [
    "parse_unit",
    "canonicalize_unit",
    "unit_identifier",
    "validate_unit",
    "units_equivalent",
    "base_dimensions",
    "list_units",
    "list_prefixes",
    # value types
    "BinaryLiteral",
    "Factor",
    "Group",
    "MetricLiteral",
    "OtherLiteral",
    "Product",
    "Quotient",
    "CanonicalUnit",
    "DimensionVector",
    "Scale",
    "BinaryPrefix",
    "MetricPrefix",
    "MetricSymbol",
]
