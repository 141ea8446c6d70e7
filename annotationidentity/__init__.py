"""Annotation Identity - checking the payloads of annotated<> type-names

Public API for parsing, validating and canonicalizing the semantic tags that
``annotated<T, dns-name-or-none, type-name>`` attaches to values.

Usage:
    from annotationidentity import parse_unit, canonicalize_unit, units_equivalent
    from annotationidentity import validate_currency, parse_annotation

    # Canonical form of a unit expression
    canonicalize_unit("m/s²").text          # Returns: 'm⋅s⁻²'

    # Order-independent comparison
    units_equivalent("m⋅s", "s⋅m")          # Returns: True

    # Currency codes, against a caller-owned active set
    validate_currency("USD", {"USD", "EUR"})  # Returns: 'USD'

    # Whole type-names
    parse_annotation("unit:kW/m²")["canonical"]  # Returns: 'kW⋅m⁻²'
"""

__version__ = "0.0.1"

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    AnnotationError,
    UnitError,
    LexError,
    UnitSyntaxError,
    CurrencyError,
    ShapeError,
    UnknownCodeError,
)

# ============================================================================
# Units API
# ============================================================================

from .units.unitapi import (
    parse_unit,           # Parse payload -> UnitExpr tree
    canonicalize_unit,    # Primary API - canonical text, dims and scale
    unit_identifier,      # Canonical text or None
    validate_unit,        # Non-raising validation for linters
    units_equivalent,     # Compare by dimension vector and scale
    base_dimensions,      # Expand derived symbols into SI base symbols
    list_units,           # Browse unit symbols
    list_prefixes,        # Browse metric / binary prefixes
)

# ============================================================================
# Currency API
# ============================================================================

from .currencies.currencyapi import (
    validate_currency,    # Primary API - shape + active-set check
    iso4217_codes,        # pycountry's ISO 4217 alphabetic codes
    currency_identifier,  # Look up code details
    is_active_currency,   # Boolean form of validate_currency
)

# ============================================================================
# Annotation dispatch
# ============================================================================

from .annotations.annotationapi import (
    parse_annotation,     # Dispatch unit:/math:angle:/currency: type-names
    validate_annotation,  # Non-raising form
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "parse_unit",
    "canonicalize_unit",
    "validate_currency",
    "parse_annotation",

    # ========================================================================
    # Units
    # ========================================================================
    "unit_identifier",
    "validate_unit",
    "units_equivalent",
    "base_dimensions",
    "list_units",
    "list_prefixes",

    # ========================================================================
    # Currencies
    # ========================================================================
    "iso4217_codes",
    "currency_identifier",
    "is_active_currency",

    # ========================================================================
    # Annotations
    # ========================================================================
    "validate_annotation",

    # ========================================================================
    # Errors
    # ========================================================================
    "AnnotationError",
    "UnitError",
    "LexError",
    "UnitSyntaxError",
    "CurrencyError",
    "ShapeError",
    "UnknownCodeError",
]
