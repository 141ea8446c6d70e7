"""Closed symbol tables for the unit grammar.

Every Unicode scalar the grammar gives meaning to lives in this module:
prefixes, unit symbols, superscript exponent digits, and operators. Grammar
revisions (e.g. the rename of the byte symbol ``By`` -> ``B``) should only
need to touch the tables here.

Prefixes and symbols are closed enumerations. A literal that does not
resolve to one of them is a lex error, never an open extension.
"""

from enum import Enum
from typing import Dict, Tuple


# ============================================================================
# Metric prefixes (power of ten)
# ============================================================================

class MetricPrefix(Enum):
    """SI decimal prefixes, valued by their text form."""

    QUETTA = "Q"
    RONNA = "R"
    YOTTA = "Y"
    ZETTA = "Z"
    EXA = "E"
    PETA = "P"
    TERA = "T"
    GIGA = "G"
    MEGA = "M"
    KILO = "k"
    HECTO = "h"
    DECA = "da"
    DECI = "d"
    CENTI = "c"
    MILLI = "m"
    MICRO = "μ"  # U+03BC
    NANO = "n"
    PICO = "p"
    FEMTO = "f"
    ATTO = "a"
    ZEPTO = "z"
    YOCTO = "y"
    RONTO = "r"
    QUECTO = "q"

    @property
    def power(self) -> int:
        return _METRIC_POWERS[self]


_METRIC_POWERS: Dict[MetricPrefix, int] = {
    MetricPrefix.QUETTA: 30,
    MetricPrefix.RONNA: 27,
    MetricPrefix.YOTTA: 24,
    MetricPrefix.ZETTA: 21,
    MetricPrefix.EXA: 18,
    MetricPrefix.PETA: 15,
    MetricPrefix.TERA: 12,
    MetricPrefix.GIGA: 9,
    MetricPrefix.MEGA: 6,
    MetricPrefix.KILO: 3,
    MetricPrefix.HECTO: 2,
    MetricPrefix.DECA: 1,
    MetricPrefix.DECI: -1,
    MetricPrefix.CENTI: -2,
    MetricPrefix.MILLI: -3,
    MetricPrefix.MICRO: -6,
    MetricPrefix.NANO: -9,
    MetricPrefix.PICO: -12,
    MetricPrefix.FEMTO: -15,
    MetricPrefix.ATTO: -18,
    MetricPrefix.ZEPTO: -21,
    MetricPrefix.YOCTO: -24,
    MetricPrefix.RONTO: -27,
    MetricPrefix.QUECTO: -30,
}


# ============================================================================
# Binary prefixes (power of two)
# ============================================================================

class BinaryPrefix(Enum):
    """IEC binary prefixes, valued by their text form."""

    KIBI = "Ki"
    MEBI = "Mi"
    GIBI = "Gi"
    TEBI = "Ti"
    PEBI = "Pi"
    EXBI = "Ei"
    ZEBI = "Zi"
    YOBI = "Yi"

    @property
    def power(self) -> int:
        return _BINARY_POWERS[self]


_BINARY_POWERS: Dict[BinaryPrefix, int] = {
    BinaryPrefix.KIBI: 10,
    BinaryPrefix.MEBI: 20,
    BinaryPrefix.GIBI: 30,
    BinaryPrefix.TEBI: 40,
    BinaryPrefix.PEBI: 50,
    BinaryPrefix.EXBI: 60,
    BinaryPrefix.ZEBI: 70,
    BinaryPrefix.YOBI: 80,
}


# ============================================================================
# Unit symbols
# ============================================================================

class MetricSymbol(Enum):
    """SI base symbols followed by the named derived symbols."""

    # base
    SECOND = "s"
    METRE = "m"
    GRAM = "g"
    AMPERE = "A"
    KELVIN = "K"
    MOLE = "mol"
    CANDELA = "cd"

    # derived
    RADIAN = "rad"
    STERADIAN = "sr"
    HERTZ = "Hz"
    NEWTON = "N"
    PASCAL = "Pa"
    JOULE = "J"
    WATT = "W"
    COULOMB = "C"
    VOLT = "V"
    FARAD = "F"
    OHM = "Ω"  # U+03A9
    SIEMENS = "S"
    WEBER = "Wb"
    TESLA = "T"
    HENRY = "H"
    LUMEN = "lm"
    LUX = "lx"
    BECQUEREL = "Bq"
    GRAY = "Gy"
    SIEVERT = "Sv"
    KATAL = "kat"

    @property
    def is_base(self) -> bool:
        return self in BASE_SYMBOLS


BASE_SYMBOLS = frozenset({
    MetricSymbol.SECOND,
    MetricSymbol.METRE,
    MetricSymbol.GRAM,
    MetricSymbol.AMPERE,
    MetricSymbol.KELVIN,
    MetricSymbol.MOLE,
    MetricSymbol.CANDELA,
})

BYTE_SYMBOL = "B"
TURN_SYMBOL = "τ"  # one full turn


# ============================================================================
# Text -> enum lookup
# ============================================================================

# Alternate code points accepted on input; canonical text always uses the
# enum value.
_INPUT_ALIASES: Dict[str, str] = {
    "µ": "μ",  # MICRO SIGN -> GREEK SMALL LETTER MU
    "Ω": "Ω",  # OHM SIGN -> GREEK CAPITAL LETTER OMEGA
}

METRIC_PREFIXES: Dict[str, MetricPrefix] = {p.value: p for p in MetricPrefix}
METRIC_SYMBOLS: Dict[str, MetricSymbol] = {s.value: s for s in MetricSymbol}
BINARY_PREFIXES: Dict[str, BinaryPrefix] = {p.value: p for p in BinaryPrefix}

for _alias, _target in _INPUT_ALIASES.items():
    if _target in METRIC_PREFIXES:
        METRIC_PREFIXES[_alias] = METRIC_PREFIXES[_target]
    if _target in METRIC_SYMBOLS:
        METRIC_SYMBOLS[_alias] = METRIC_SYMBOLS[_target]

# Longest text first so that "da" is tried before "d"
METRIC_PREFIX_ORDER: Tuple[str, ...] = tuple(
    sorted(METRIC_PREFIXES, key=len, reverse=True)
)
BINARY_PREFIX_ORDER: Tuple[str, ...] = tuple(
    sorted(BINARY_PREFIXES, key=len, reverse=True)
)


# ============================================================================
# Operators and exponent characters
# ============================================================================

MULTIPLY = "⋅"  # U+22C5 DOT OPERATOR
DIVIDE = "/"
GROUP_OPEN = "("
GROUP_CLOSE = ")"
SUPERSCRIPT_MINUS = "⁻"  # U+207B

SUPERSCRIPT_DIGITS: Dict[str, int] = {
    "⁰": 0,  # U+2070
    "¹": 1,  # U+00B9
    "²": 2,  # U+00B2
    "³": 3,  # U+00B3
    "⁴": 4,  # U+2074
    "⁵": 5,  # U+2075
    "⁶": 6,  # U+2076
    "⁷": 7,  # U+2077
    "⁸": 8,  # U+2078
    "⁹": 9,  # U+2079
}
DIGIT_SUPERSCRIPTS: Dict[int, str] = {v: k for k, v in SUPERSCRIPT_DIGITS.items()}

OPERATORS = frozenset({MULTIPLY, DIVIDE, GROUP_OPEN, GROUP_CLOSE})
EXPONENT_CHARS = frozenset(SUPERSCRIPT_DIGITS) | {SUPERSCRIPT_MINUS}

# Characters people type instead of the grammar's operators
LOOKALIKE_HINTS: Dict[str, str] = {
    "*": f"use '{MULTIPLY}' (U+22C5) for multiplication",
    "·": f"use '{MULTIPLY}' (U+22C5) instead of middle dot (U+00B7)",
    "∙": f"use '{MULTIPLY}' (U+22C5) instead of bullet operator (U+2219)",
    ".": f"use '{MULTIPLY}' (U+22C5) for multiplication",
    "×": f"use '{MULTIPLY}' (U+22C5) instead of multiplication sign (U+00D7)",
    "^": "write exponents with superscript digits, e.g. 'm²'",
    "-": f"use superscript minus '{SUPERSCRIPT_MINUS}' (U+207B) for negative exponents",
    "−": f"use superscript minus '{SUPERSCRIPT_MINUS}' (U+207B) for negative exponents",
    "÷": f"use '{DIVIDE}' for division",
    "⁺": "superscript plus is not allowed; positive exponents are unsigned",
}


def superscript(exponent: int) -> str:
    """Render an integer exponent in superscript form.

    Examples:
        >>> superscript(2)
        '²'
        >>> superscript(-12)
        '⁻¹²'
    """
    sign = SUPERSCRIPT_MINUS if exponent < 0 else ""
    return sign + "".join(DIGIT_SUPERSCRIPTS[int(d)] for d in str(abs(exponent)))


def known_literals() -> Tuple[str, ...]:
    """Every bare symbol plus a few common prefixed spellings, for suggestions."""
    names = [s.value for s in MetricSymbol]
    names += ["k" + MetricSymbol.GRAM.value, "k" + MetricSymbol.METRE.value]
    names += [BYTE_SYMBOL] + [p.value + BYTE_SYMBOL for p in BinaryPrefix]
    names.append(TURN_SYMBOL)
    return tuple(names)


__all__ = [
    "MetricPrefix",
    "BinaryPrefix",
    "MetricSymbol",
    "BASE_SYMBOLS",
    "BYTE_SYMBOL",
    "TURN_SYMBOL",
    "METRIC_PREFIXES",
    "METRIC_SYMBOLS",
    "BINARY_PREFIXES",
    "MULTIPLY",
    "DIVIDE",
    "GROUP_OPEN",
    "GROUP_CLOSE",
    "SUPERSCRIPT_MINUS",
    "SUPERSCRIPT_DIGITS",
    "OPERATORS",
    "EXPONENT_CHARS",
    "LOOKALIKE_HINTS",
    "superscript",
    "known_literals",
]
