"""
Data File Utilities
-------------------

Helpers for the YAML metadata catalogs shipped next to each module.

Functions:
  - load_yaml_file: Load and parse YAML file
  - module_data_path: Locate a data file that lives beside a module
"""

from pathlib import Path


def load_yaml_file(path: Path) -> dict:
    """
    Load and parse YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML data as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file does not exist

    Examples:
        >>> data = load_yaml_file(Path("unitconfig.yaml"))
        >>> data['symbols']['N']['name']
        'newton'
    """
    import yaml

    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def module_data_path(module_file: str, filename: str) -> Path:
    """Path of ``filename`` in the same directory as ``module_file``."""
    return Path(module_file).parent / filename


__all__ = [
    "load_yaml_file",
    "module_data_path",
]
