"""Shared utilities for the annotationidentity package."""

from annotationidentity.utils.resolver import (
    score_candidate,
    closest_match,
)
from annotationidentity.utils.build_utils import (
    load_yaml_file,
    module_data_path,
)

__all__ = [
    # Suggestions
    "score_candidate",
    "closest_match",
    # Data files
    "load_yaml_file",
    "module_data_path",
]
