"""Heuristics and checks for catalog content."""

from .format_specifiers import FormatSpecifierValidator, extract_format_specifiers
from .plural_heuristics import detect_duplicates_across_forms, forms_for_language, looks_plural

__all__ = [
    "FormatSpecifierValidator",
    "extract_format_specifiers",
    "detect_duplicates_across_forms",
    "forms_for_language",
    "looks_plural",
]
