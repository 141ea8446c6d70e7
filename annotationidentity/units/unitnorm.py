"""Unit canonicalization.

Flattens a parsed UnitExpr into a canonical, order-independent form.

Key Principles:
1. Canonical form depends only on the net exponent of each literal, never on
   how the original string grouped or ordered factors
2. Literals whose exponents cancel are dropped (m/m is dimensionless)
3. Canonicalization never fails for a parsed expression
4. No numeric conversion: prefixes become a Scale, they are not applied

Canonical text rule: factors sorted by (symbol, prefix), joined with ``⋅``,
negative exponents written with superscript minus (``m⋅s⁻²``), exponent 1
omitted. A dimensionless result renders as the empty string.
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union
import copy
import logging

from annotationidentity.units.unitexpr import (
    BinaryLiteral,
    Factor,
    Group,
    MetricLiteral,
    Product,
    Quotient,
    UnitExpr,
    UnitLiteral,
)
from annotationidentity.units.unitsymbols import (
    MULTIPLY,
    MetricSymbol,
    superscript,
)
from annotationidentity.utils.build_utils import load_yaml_file, module_data_path

logger = logging.getLogger(__name__)


# ============================================================================
# Load Configuration
# ============================================================================

def load_unit_catalog(path: Optional[Union[str, Path]] = None) -> Dict:
    """Load the unit symbol catalog from YAML.

    Args:
        path: Optional alternative catalog. Defaults to the packaged
              ``unitconfig.yaml`` next to this module.

    Returns:
        Dictionary with ``symbols`` and ``prefixes`` sections. Each call
        returns a fresh copy; edits never reach the cached catalog.
    """
    return copy.deepcopy(_cached_unit_catalog(path))


@lru_cache(maxsize=4)
def _cached_unit_catalog(path: Optional[Union[str, Path]]) -> Dict:
    if path is None:
        path = module_data_path(__file__, "unitconfig.yaml")

    catalog = load_yaml_file(Path(path))
    symbols = catalog.setdefault("symbols", {})
    catalog.setdefault("prefixes", {})

    missing = [s.value for s in MetricSymbol if s.value not in symbols]
    if missing:
        logger.warning(f"Unit catalog {path} has no entry for: {', '.join(missing)}")

    logger.info(f"Loaded unit catalog with {len(symbols)} symbols from {path}")
    return catalog


# ============================================================================
# Result types
# ============================================================================

@dataclass(frozen=True)
class Scale:
    """Aggregate prefix multiplier ``10**decimal * 2**binary``.

    Kept symbolic so that no floating point ever enters an equality check.
    """

    decimal: int = 0
    binary: int = 0

    @property
    def is_unity(self) -> bool:
        return self.decimal == 0 and self.binary == 0

    def __add__(self, other: "Scale") -> "Scale":
        return Scale(self.decimal + other.decimal, self.binary + other.binary)

    def __str__(self) -> str:
        parts = []
        if self.decimal:
            parts.append(f"10{superscript(self.decimal)}")
        if self.binary:
            parts.append(f"2{superscript(self.binary)}")
        return MULTIPLY.join(parts) or "1"


class DimensionVector(Mapping):
    """Immutable mapping of unit symbol -> net nonzero exponent.

    Equality is mapping equality, so factor order never matters.

    Examples:
        >>> DimensionVector({"m": 1, "s": -2})
        DimensionVector({'m': 1, 's': -2})
        >>> DimensionVector({"m": 0})
        DimensionVector({})
    """

    __slots__ = ("_exponents",)

    def __init__(self, exponents: Optional[Mapping] = None):
        items = (exponents or {}).items()
        self._exponents: Tuple[Tuple[str, int], ...] = tuple(
            sorted((k, int(v)) for k, v in items if v)
        )

    def __getitem__(self, symbol: str) -> int:
        for key, value in self._exponents:
            if key == symbol:
                return value
        raise KeyError(symbol)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._exponents)

    def __len__(self) -> int:
        return len(self._exponents)

    def __hash__(self) -> int:
        return hash(self._exponents)

    def __repr__(self) -> str:
        return f"DimensionVector({dict(self._exponents)!r})"

    @property
    def is_dimensionless(self) -> bool:
        return not self._exponents


@dataclass(frozen=True)
class CanonicalUnit:
    """Canonical form of a unit expression.

    Attributes:
        text: Canonical string (empty for dimensionless)
        factors: One Factor per (prefix, symbol) with its net exponent, in
                 canonical order
        dims: Net exponent per bare symbol, prefixes factored out
        scale: Aggregate prefix multiplier
    """

    text: str
    factors: Tuple[Factor, ...]
    dims: DimensionVector
    scale: Scale

    @property
    def is_dimensionless(self) -> bool:
        return self.dims.is_dimensionless

    def __str__(self) -> str:
        return self.text


# ============================================================================
# Canonicalization
# ============================================================================

def _literal_sort_key(literal: UnitLiteral) -> Tuple[str, str]:
    return (literal.symbol_text, literal.prefix_text)


def _literal_scale(literal: UnitLiteral, exponent: int) -> Scale:
    if isinstance(literal, MetricLiteral) and literal.prefix is not None:
        return Scale(decimal=literal.prefix.power * exponent)
    if isinstance(literal, BinaryLiteral) and literal.prefix is not None:
        return Scale(binary=literal.prefix.power * exponent)
    return Scale()


def flatten_exponents(expr: UnitExpr) -> Dict[UnitLiteral, int]:
    """Net exponent per literal, with cancelled literals removed.

    Walks the tree once carrying a multiplier: unchanged under Product and
    the left of Quotient, negated on the right of Quotient, multiplied by a
    Group's exponent. Each Factor contributes ``multiplier * exponent``.

    Examples:
        >>> flatten_exponents(parse_unit("m/s²"))
        {MetricLiteral(METRE): 1, MetricLiteral(SECOND): -2}
        >>> flatten_exponents(parse_unit("m/m"))
        {}
    """
    totals: Dict[UnitLiteral, int] = {}
    stack = [(expr, 1)]

    while stack:
        node, multiplier = stack.pop()
        if isinstance(node, Factor):
            totals[node.literal] = totals.get(node.literal, 0) + multiplier * node.exponent
        elif isinstance(node, Group):
            stack.append((node.inner, multiplier * node.exponent))
        elif isinstance(node, Product):
            stack.append((node.right, multiplier))
            stack.append((node.left, multiplier))
        elif isinstance(node, Quotient):
            stack.append((node.right, -multiplier))
            stack.append((node.left, multiplier))
        else:
            raise TypeError(f"not a unit expression node: {node!r}")

    return {literal: exp for literal, exp in totals.items() if exp != 0}


def canonicalize(expr: UnitExpr) -> CanonicalUnit:
    """Canonicalize a parsed unit expression.

    Args:
        expr: UnitExpr from parse_unit

    Returns:
        CanonicalUnit with text, factors, dims and scale

    Examples:
        >>> canonicalize(parse_unit("s⋅m")).text
        'm⋅s'
        >>> canonicalize(parse_unit("m/s²")).text
        'm⋅s⁻²'
        >>> canonicalize(parse_unit("(m/s)²")).text
        'm²⋅s⁻²'
        >>> canonicalize(parse_unit("km/m")).dims
        DimensionVector({})
        >>> str(canonicalize(parse_unit("km/m")).scale)
        '10³'
    """
    totals = flatten_exponents(expr)

    factors = tuple(
        Factor(literal, totals[literal])
        for literal in sorted(totals, key=_literal_sort_key)
    )

    dims: Dict[str, int] = {}
    scale = Scale()
    for factor in factors:
        symbol = factor.literal.symbol_text
        dims[symbol] = dims.get(symbol, 0) + factor.exponent
        scale = scale + _literal_scale(factor.literal, factor.exponent)

    return CanonicalUnit(
        text=MULTIPLY.join(str(f) for f in factors),
        factors=factors,
        dims=DimensionVector(dims),
        scale=scale,
    )


def base_decomposition(
    canonical: CanonicalUnit,
    catalog: Optional[Dict] = None,
) -> Tuple[DimensionVector, Scale]:
    """Expand derived symbols into SI base symbols.

    Every symbol with a ``base`` entry in the catalog is replaced by its
    decomposition; base symbols and symbols without one (rad, sr, B, τ) are
    kept. Prefix scale and the decomposition's own ``decimal`` scale are
    both accumulated.

    Args:
        canonical: CanonicalUnit to expand
        catalog: Optional catalog dict (default: load_unit_catalog())

    Returns:
        (base DimensionVector, total Scale)

    Examples:
        >>> dims, scale = base_decomposition(canonicalize(parse_unit("kN")))
        >>> dims
        DimensionVector({'g': 1, 'm': 1, 's': -2})
        >>> str(scale)
        '10⁶'
    """
    if catalog is None:
        catalog = load_unit_catalog()
    symbols = catalog.get("symbols", {})

    dims: Dict[str, int] = {}
    scale = canonical.scale
    for factor in canonical.factors:
        symbol = factor.literal.symbol_text
        entry = symbols.get(symbol) or {}
        base = entry.get("base")
        if not base:
            dims[symbol] = dims.get(symbol, 0) + factor.exponent
            continue
        for base_symbol, base_exponent in base.items():
            dims[base_symbol] = dims.get(base_symbol, 0) + base_exponent * factor.exponent
        scale = scale + Scale(decimal=int(entry.get("decimal", 0)) * factor.exponent)

    return DimensionVector(dims), scale


__all__ = [
    "Scale",
    "DimensionVector",
    "CanonicalUnit",
    "flatten_exponents",
    "canonicalize",
    "base_decomposition",
    "load_unit_catalog",
]
