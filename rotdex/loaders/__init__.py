"""Loaders for declarative reward catalogs."""

from .json_loader import (
    catalog_to_dict,
    load_catalog_from_json,
    parse_catalog_dict,
    validate_catalog_dict,
    validate_catalog_file,
)

__all__ = [
    "catalog_to_dict",
    "load_catalog_from_json",
    "parse_catalog_dict",
    "validate_catalog_dict",
    "validate_catalog_file",
]
