"""Unit expression value types.

A parsed unit string is a small immutable tree:

    Product(left, right)      left ⋅ right
    Quotient(left, right)     left / right
    Factor(literal, exponent) literal raised to a nonzero integer power
    Group(inner, exponent)    ( inner ), optionally raised to a power

Leaves hold a UnitLiteral, one of:

    MetricLiteral(symbol, prefix)   e.g. km, daN, μs
    BinaryLiteral(prefix)           e.g. B, KiB
    OtherLiteral()                  τ

``str()`` of any node reproduces the surface text it was parsed from
(groups are kept for that reason), so for any parsed expression
``parse_unit(str(expr)) == expr``.
"""

from dataclasses import dataclass
from typing import Optional, Union

from annotationidentity.units.unitsymbols import (
    BinaryPrefix,
    MetricPrefix,
    MetricSymbol,
    BYTE_SYMBOL,
    TURN_SYMBOL,
    MULTIPLY,
    DIVIDE,
    superscript,
)


# ============================================================================
# Literals
# ============================================================================

@dataclass(frozen=True)
class MetricLiteral:
    symbol: MetricSymbol
    prefix: Optional[MetricPrefix] = None

    @property
    def symbol_text(self) -> str:
        return self.symbol.value

    @property
    def prefix_text(self) -> str:
        return self.prefix.value if self.prefix else ""

    def __str__(self) -> str:
        return self.prefix_text + self.symbol_text


@dataclass(frozen=True)
class BinaryLiteral:
    prefix: Optional[BinaryPrefix] = None

    @property
    def symbol_text(self) -> str:
        return BYTE_SYMBOL

    @property
    def prefix_text(self) -> str:
        return self.prefix.value if self.prefix else ""

    def __str__(self) -> str:
        return self.prefix_text + BYTE_SYMBOL


@dataclass(frozen=True)
class OtherLiteral:
    # τ takes no prefix

    @property
    def symbol_text(self) -> str:
        return TURN_SYMBOL

    @property
    def prefix_text(self) -> str:
        return ""

    def __str__(self) -> str:
        return TURN_SYMBOL


UnitLiteral = Union[MetricLiteral, BinaryLiteral, OtherLiteral]


# ============================================================================
# Expression tree
# ============================================================================

def _exponent_text(exponent: int) -> str:
    return "" if exponent == 1 else superscript(exponent)


@dataclass(frozen=True)
class Factor:
    literal: UnitLiteral
    exponent: int = 1

    def __post_init__(self):
        if self.exponent == 0:
            raise ValueError("Factor exponent must be nonzero")

    def __str__(self) -> str:
        return f"{self.literal}{_exponent_text(self.exponent)}"


@dataclass(frozen=True)
class Group:
    inner: "UnitExpr"
    exponent: int = 1

    def __post_init__(self):
        if self.exponent == 0:
            raise ValueError("Group exponent must be nonzero")

    def __str__(self) -> str:
        return f"({self.inner}){_exponent_text(self.exponent)}"


@dataclass(frozen=True)
class Product:
    left: "UnitExpr"
    right: "UnitExpr"

    def __str__(self) -> str:
        return f"{self.left}{MULTIPLY}{_operand_text(self.right)}"


@dataclass(frozen=True)
class Quotient:
    left: "UnitExpr"
    right: "UnitExpr"

    def __str__(self) -> str:
        return f"{self.left}{DIVIDE}{_operand_text(self.right)}"


UnitExpr = Union[Product, Quotient, Factor, Group]


def _operand_text(expr: "UnitExpr") -> str:
    # The grammar is left-recursive: a right operand is always a factor, so a
    # compound right operand built by hand needs parentheses to round-trip.
    if isinstance(expr, (Product, Quotient)):
        return f"({expr})"
    return str(expr)


__all__ = [
    "MetricLiteral",
    "BinaryLiteral",
    "OtherLiteral",
    "UnitLiteral",
    "Factor",
    "Group",
    "Product",
    "Quotient",
    "UnitExpr",
]
