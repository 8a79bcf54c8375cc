"""Data models for .xcstrings catalogs."""

from .string_entry import (
    DeviceKind,
    Localization,
    PluralForm,
    StringEntry,
    StringUnit,
    UnitState,
    Variation,
    Variations,
    VariationKind,
    XCStringsFile,
)

__all__ = [
    "DeviceKind",
    "Localization",
    "PluralForm",
    "StringEntry",
    "StringUnit",
    "UnitState",
    "Variation",
    "Variations",
    "VariationKind",
    "XCStringsFile",
]
