"""Dispatch of ``annotated<>`` type-names to their payload checkers."""

from annotationidentity.annotations.annotationapi import (
    parse_annotation,
    validate_annotation,
)

__all__ = [
    "parse_annotation",
    "validate_annotation",
]
