"""
Annotation Errors
-----------------

Exception hierarchy shared by the unit and currency modules.

Every error carries the text that was being checked, the character offset of
the offending position, and a human-readable reason. ``str(error)`` renders
the reason followed by the text and a caret under the offset, suitable for
showing to someone who mistyped an annotation:

  >>> parse_unit("m//s")
  UnitSyntaxError: expected unit literal or '(' but found '/' at offset 2
  m//s
    ^

Hierarchy:
  AnnotationError(ValueError)
    UnitError
      LexError          - unrecognized literal or malformed exponent
      UnitSyntaxError   - tokens valid but grammar structure violated
    CurrencyError
      ShapeError        - not three uppercase A-Z letters
      UnknownCodeError  - well-formed but not an active code
"""

from typing import Optional


class AnnotationError(ValueError):
    """Base class for all annotation payload errors.

    ``args`` holds the constructor arguments; ``str()`` renders the caret view.
    """

    def __init__(self, reason: str, text: str, offset: Optional[int] = None):
        self.reason = reason
        self.text = text
        self.offset = offset
        super().__init__(reason, text, offset)

    def __str__(self) -> str:
        return self._render()

    def _render(self) -> str:
        if self.offset is None:
            return self.reason
        message = f"{self.reason} at offset {self.offset}"
        if 0 <= self.offset <= len(self.text):
            message += f"\n{self.text}\n{' ' * self.offset}^"
        return message

    def shifted(self, delta: int, text: str) -> "AnnotationError":
        """Return a copy of this error re-anchored inside a longer ``text``.

        Used when a payload error is reported against the full type-name
        (e.g. offset 2 in ``"m//s"`` becomes offset 7 in ``"unit:m//s"``).
        """
        offset = None if self.offset is None else self.offset + delta
        return self.__class__(self.reason, text, offset, *self.args[3:])


class UnitError(AnnotationError):
    """A unit expression failed to parse.

    ``production`` names the grammar production that failed
    (``"literal"``, ``"exponent"``, ``"group"``, ``"unit"``, ...).
    """

    def __init__(
        self,
        reason: str,
        text: str,
        offset: Optional[int] = None,
        production: Optional[str] = None,
    ):
        self.production = production
        super().__init__(reason, text, offset)
        self.args = (reason, text, offset, production)


class LexError(UnitError):
    """Input cannot begin or continue any valid token."""


class UnitSyntaxError(UnitError):
    """Tokens are individually valid but violate the grammar structure."""


class CurrencyError(AnnotationError):
    """A currency code failed validation."""


class ShapeError(CurrencyError):
    """Code is not exactly three uppercase Latin letters."""


class UnknownCodeError(CurrencyError):
    """Code is well-formed but not in the active code set."""


__all__ = [
    "AnnotationError",
    "UnitError",
    "LexError",
    "UnitSyntaxError",
    "CurrencyError",
    "ShapeError",
    "UnknownCodeError",
]
