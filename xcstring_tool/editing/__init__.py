"""Catalog editing and state derivation."""

from .editor import CatalogEditor, EditResult
from .state import derive_state, determine_new_state

__all__ = ["CatalogEditor", "EditResult", "derive_state", "determine_new_state"]
