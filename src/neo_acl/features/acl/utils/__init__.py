"""Utilities for the access control feature."""

from .normalization import Name, Names, make_list, make_optional_list

__all__ = ["Name", "Names", "make_list", "make_optional_list"]
