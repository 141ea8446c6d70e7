"""Unit Expression Parser
----------------------

Recursive-descent parser for the ``unit:`` annotation payload grammar:

    unit     ::= factor | unit '⋅' factor | unit '/' factor
    factor   ::= base exponent?
    base     ::= literal | '(' unit ')'
    exponent ::= '⁻'? exp_digit_nonzero exp_digit*
    literal  ::= metric_literal | binary_literal | other_literal

``⋅`` and ``/`` share one precedence level and associate to the left, so
``a⋅b/c`` is ``(a⋅b)/c``. Operands are never reordered here; reordering is
only valid after canonicalization.

A literal is the maximal run of characters up to the next operator,
parenthesis, or exponent character. The run is then resolved against the
closed tables: metric (longest prefix first), then binary, then τ.

Examples:
  >>> parse_unit("daN")
  Factor(literal=MetricLiteral(symbol=<MetricSymbol.NEWTON: 'N'>, prefix=<MetricPrefix.DECA: 'da'>), exponent=1)
  >>> str(parse_unit("m⋅s⁻²"))
  'm⋅s⁻²'
  >>> parse_unit("m⁰")
  LexError: leading zero exponent digit at offset 1
"""

from __future__ import annotations
from typing import Optional

from annotationidentity.errors import LexError, UnitSyntaxError
from annotationidentity.units.unitexpr import (
    BinaryLiteral,
    Factor,
    Group,
    MetricLiteral,
    OtherLiteral,
    Product,
    Quotient,
    UnitExpr,
    UnitLiteral,
)
from annotationidentity.units.unitsymbols import (
    BINARY_PREFIXES,
    BINARY_PREFIX_ORDER,
    BYTE_SYMBOL,
    DIVIDE,
    EXPONENT_CHARS,
    GROUP_CLOSE,
    GROUP_OPEN,
    LOOKALIKE_HINTS,
    METRIC_PREFIXES,
    METRIC_PREFIX_ORDER,
    METRIC_SYMBOLS,
    MULTIPLY,
    OPERATORS,
    SUPERSCRIPT_DIGITS,
    SUPERSCRIPT_MINUS,
    TURN_SYMBOL,
    known_literals,
)
from annotationidentity.utils.resolver import closest_match


# Exponents are signed 32-bit integers
EXPONENT_MIN = -(2 ** 31)
EXPONENT_MAX = 2 ** 31 - 1

# Parenthesis nesting limit; keeps recursion well inside the interpreter's stack
MAX_GROUP_DEPTH = 64

# Operators per expression; bounds the depth of the left-nested tree that
# str() and == walk
MAX_OPERATORS = 128


# ============================================================================
# Literal resolution
# ============================================================================

def resolve_literal(text: str) -> Optional[UnitLiteral]:
    """Resolve a literal run against the closed symbol tables.

    Order: metric (longest prefix that leaves a valid symbol, then no
    prefix), binary, then τ. Returns None when nothing matches.

    Examples:
        >>> resolve_literal("mm")
        MetricLiteral(symbol=<MetricSymbol.METRE: 'm'>, prefix=<MetricPrefix.MILLI: 'm'>)
        >>> resolve_literal("Pa")
        MetricLiteral(symbol=<MetricSymbol.PASCAL: 'Pa'>, prefix=None)
        >>> resolve_literal("KiB")
        BinaryLiteral(prefix=<BinaryPrefix.KIBI: 'Ki'>)
        >>> resolve_literal("min") is None
        True
    """
    # metric_literal
    for prefix_text in METRIC_PREFIX_ORDER:
        if text.startswith(prefix_text):
            rest = text[len(prefix_text):]
            if rest in METRIC_SYMBOLS:
                return MetricLiteral(METRIC_SYMBOLS[rest], METRIC_PREFIXES[prefix_text])
    if text in METRIC_SYMBOLS:
        return MetricLiteral(METRIC_SYMBOLS[text])

    # binary_literal
    if text == BYTE_SYMBOL:
        return BinaryLiteral()
    for prefix_text in BINARY_PREFIX_ORDER:
        if text == prefix_text + BYTE_SYMBOL:
            return BinaryLiteral(BINARY_PREFIXES[prefix_text])

    # other_literal
    if text == TURN_SYMBOL:
        return OtherLiteral()

    return None


def _explain_unresolved(text: str) -> str:
    """Build the reason for a literal run that matched nothing."""
    reason = f"unrecognized unit literal '{text}'"

    if text.endswith(BYTE_SYMBOL) and text[:-1] in METRIC_PREFIXES:
        return (
            f"{reason}: metric prefix '{text[:-1]}' cannot combine with byte "
            f"symbol '{BYTE_SYMBOL}'; use a binary prefix such as 'Ki'"
        )
    for prefix_text in BINARY_PREFIX_ORDER:
        if text.startswith(prefix_text) and text[len(prefix_text):] in METRIC_SYMBOLS:
            return (
                f"{reason}: binary prefix '{prefix_text}' only combines with "
                f"byte symbol '{BYTE_SYMBOL}'"
            )
    if text.endswith(TURN_SYMBOL):
        return f"{reason}: '{TURN_SYMBOL}' does not take a prefix"

    suggestion = closest_match(text, known_literals())
    if suggestion is not None:
        return f"{reason}: did you mean '{suggestion}'?"
    return reason


def _is_foreign(ch: str) -> bool:
    """Characters that can never appear in a unit expression."""
    return ch.isspace() or ch in LOOKALIKE_HINTS or ch in "0123456789"


def _foreign_reason(ch: str) -> str:
    if ch.isspace():
        return "whitespace is not allowed in a unit expression"
    if ch in "0123456789":
        return f"unexpected digit '{ch}': write exponents with superscript digits, e.g. 'm²'"
    return f"unexpected character '{ch}': {LOOKALIKE_HINTS[ch]}"


# ============================================================================
# Parser
# ============================================================================

class _UnitParser:
    """Single-use parser state: the input text and a cursor."""

    def __init__(self, text: str, allow_chained_division: bool):
        self.text = text
        self.pos = 0
        self.depth = 0
        self.operators = 0
        self.allow_chained_division = allow_chained_division

    # ---- helpers ----

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def _lex_error(self, reason: str, offset: int, production: str) -> LexError:
        return LexError(reason, self.text, offset, production)

    def _syntax_error(self, reason: str, offset: int, production: str) -> UnitSyntaxError:
        return UnitSyntaxError(reason, self.text, offset, production)

    def _reject_unexpected(self, production: str) -> None:
        """Raise a LexError if the cursor sits on a character no token accepts."""
        ch = self._peek()
        if ch is None:
            return
        if _is_foreign(ch):
            raise self._lex_error(_foreign_reason(ch), self.pos, production)
        if ch in EXPONENT_CHARS:
            raise self._lex_error(
                f"unexpected exponent character '{ch}'", self.pos, "exponent"
            )

    # ---- productions ----

    def parse(self) -> UnitExpr:
        if not self.text:
            raise self._syntax_error("empty unit expression", 0, "unit")

        expr = self._unit()

        if self.pos < len(self.text):
            self._reject_unexpected("unit")
            if self._peek() == GROUP_CLOSE:
                raise self._syntax_error("unbalanced ')'", self.pos, "group")
            raise self._syntax_error(
                f"trailing characters after expression; expected '{MULTIPLY}' or '{DIVIDE}'",
                self.pos,
                "unit",
            )
        return expr

    def _unit(self) -> UnitExpr:
        left = self._factor()
        divided = False

        while self._peek() in (MULTIPLY, DIVIDE):
            op = self._peek()
            op_offset = self.pos
            self.pos += 1

            self.operators += 1
            if self.operators > MAX_OPERATORS:
                raise self._syntax_error(
                    f"more than {MAX_OPERATORS} operators in one unit expression",
                    op_offset,
                    "unit",
                )

            if op == DIVIDE:
                if divided and not self.allow_chained_division:
                    raise self._syntax_error(
                        "chained division is ambiguous; group the denominator in parentheses",
                        op_offset,
                        "unit",
                    )
                divided = True

            right = self._factor()
            left = Product(left, right) if op == MULTIPLY else Quotient(left, right)

        return left

    def _factor(self) -> UnitExpr:
        ch = self._peek()

        if ch is None:
            raise self._syntax_error(
                "expected unit literal or '(' but reached end of input", self.pos, "factor"
            )

        if ch == GROUP_OPEN:
            return self._group()

        if ch in OPERATORS:
            raise self._syntax_error(
                f"expected unit literal or '(' but found '{ch}'", self.pos, "factor"
            )

        if ch in EXPONENT_CHARS:
            raise self._syntax_error(
                "exponent without a unit literal", self.pos, "factor"
            )

        literal = self._literal()
        exponent = self._exponent()
        return Factor(literal, exponent)

    def _group(self) -> Group:
        open_offset = self.pos
        self.depth += 1
        if self.depth > MAX_GROUP_DEPTH:
            raise self._syntax_error(
                f"groups nested deeper than {MAX_GROUP_DEPTH} levels", open_offset, "group"
            )
        self.pos += 1

        inner = self._unit()

        if self._peek() is None:
            raise self._syntax_error("unterminated group", open_offset, "group")
        if self._peek() != GROUP_CLOSE:
            self._reject_unexpected("group")
            raise self._syntax_error(
                f"expected ')' to close group opened at offset {open_offset}",
                self.pos,
                "group",
            )
        self.pos += 1
        self.depth -= 1

        return Group(inner, self._exponent())

    def _literal(self) -> UnitLiteral:
        start = self.pos
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch in OPERATORS or ch in EXPONENT_CHARS or _is_foreign(ch):
                break
            self.pos += 1

        if self.pos == start:
            # Cursor is on a foreign character
            raise self._lex_error(_foreign_reason(self.text[start]), start, "literal")

        run = self.text[start:self.pos]
        literal = resolve_literal(run)
        if literal is None:
            raise self._lex_error(_explain_unresolved(run), start, "literal")
        return literal

    def _exponent(self) -> int:
        start = self.pos
        negative = False

        if self._peek() == SUPERSCRIPT_MINUS:
            negative = True
            self.pos += 1

        digits_start = self.pos
        while self._peek() is not None and self._peek() in SUPERSCRIPT_DIGITS:
            self.pos += 1
        digits = self.text[digits_start:self.pos]

        if not digits:
            if negative:
                raise self._lex_error(
                    "superscript minus must be followed by a superscript digit",
                    start,
                    "exponent",
                )
            return 1

        if SUPERSCRIPT_DIGITS[digits[0]] == 0:
            raise self._lex_error("leading zero exponent digit", digits_start, "exponent")

        value = 0
        for ch in digits:
            value = value * 10 + SUPERSCRIPT_DIGITS[ch]
        if negative:
            value = -value

        if not EXPONENT_MIN <= value <= EXPONENT_MAX:
            raise self._lex_error("exponent out of range", start, "exponent")
        return value


def parse_unit(text: str, *, allow_chained_division: bool = True) -> UnitExpr:
    """Parse a unit annotation payload into an expression tree.

    Args:
        text: The payload after ``unit:`` (e.g. "m/s²"); must be non-empty
        allow_chained_division: Accept ``a/b/c`` as ``(a/b)/c`` (default).
            When False, a second ``/`` at the same nesting level is a
            UnitSyntaxError and the denominator has to be parenthesized.

    Returns:
        UnitExpr tree

    Raises:
        LexError: unrecognized literal, malformed exponent, stray character
        UnitSyntaxError: empty input, missing operand, unbalanced
            parentheses, trailing input, more than MAX_OPERATORS operators
    """
    if not isinstance(text, str):
        raise TypeError(f"unit expression must be str, got {type(text).__name__}")
    return _UnitParser(text, allow_chained_division).parse()


__all__ = [
    "parse_unit",
    "resolve_literal",
    "EXPONENT_MIN",
    "EXPONENT_MAX",
    "MAX_GROUP_DEPTH",
    "MAX_OPERATORS",
]
