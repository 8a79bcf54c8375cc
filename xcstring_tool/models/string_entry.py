"""Data models for XCStrings file structure."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional


class UnitState(str, Enum):
    """Translation progress of a string unit."""

    NEW = "new"
    TRANSLATED = "translated"
    NEEDS_REVIEW = "needs_review"
    STALE = "stale"
    # Derived only, never written to a file
    NOT_TRANSLATED = "not_translated"
    SOURCE = "source"

    @property
    def persistable(self) -> bool:
        return self not in (UnitState.NOT_TRANSLATED, UnitState.SOURCE)


class VariationKind(str, Enum):
    PLURAL = "plural"
    DEVICE = "device"


class PluralForm(str, Enum):
    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class DeviceKind(str, Enum):
    IPHONE = "iphone"
    IPOD = "ipod"
    IPAD = "ipad"
    WATCH = "watch"
    TV = "tv"
    MAC = "mac"
    OTHER = "other"


@dataclass
class StringUnit:
    """Represents a single string translation unit."""

    value: str
    state: UnitState = UnitState.NEW


@dataclass
class Variation:
    """A string unit scoped to one plural form or device kind."""

    string_unit: StringUnit


@dataclass
class Variations:
    """Plural and device variant maps of a localization."""

    plural: Optional[Dict[str, Variation]] = None
    device: Optional[Dict[str, Variation]] = None

    def get(self, kind: VariationKind) -> Optional[Dict[str, Variation]]:
        return self.plural if kind == VariationKind.PLURAL else self.device

    def put(self, kind: VariationKind, variants: Optional[Dict[str, Variation]]) -> None:
        if kind == VariationKind.PLURAL:
            self.plural = variants
        else:
            self.device = variants

    def is_empty(self) -> bool:
        return not self.plural and not self.device


@dataclass
class Localization:
    """Represents a localization entry for a specific language."""

    string_unit: Optional[StringUnit] = None
    variations: Optional[Variations] = None

    def all_units(self) -> List[StringUnit]:
        """
        Collect every string unit of this localization.

        The standard unit comes first, then plural variants, then device
        variants, each map walked in sorted key order.
        """
        units = []
        if self.string_unit is not None:
            units.append(self.string_unit)
        if self.variations is not None:
            for variants in (self.variations.plural, self.variations.device):
                for name in sorted(variants or {}):
                    units.append(variants[name].string_unit)
        return units

    def all_values(self) -> List[str]:
        return [unit.value for unit in self.all_units()]

    def is_empty(self) -> bool:
        """Check if localization carries no translation content."""
        if self.string_unit is not None and self.string_unit.value != "":
            return False
        if self.variations is not None and not self.variations.is_empty():
            return False
        return True


@dataclass
class StringEntry:
    """Represents a single localizable string entry."""

    key: str
    comment: Optional[str] = None
    should_translate: Optional[bool] = None
    localizations: Optional[Dict[str, Localization]] = None
    extraction_state: Optional[str] = None  # manual, extracted_with_value, stale...

    @property
    def is_translatable(self) -> bool:
        """Entries marked "do not translate" are skipped by bulk operations."""
        return self.should_translate is not False

    def get_localization(self, language: str) -> Optional[Localization]:
        if not self.localizations:
            return None
        return self.localizations.get(language)

    def get_source_value(self, source_language: str = "en") -> str:
        """Get the source language value for this string."""
        loc = self.get_localization(source_language)
        if loc and loc.string_unit:
            return loc.string_unit.value
        # If no explicit localization, the key itself is the source value
        return self.key

    def has_translation(self, language: str) -> bool:
        """Check if this string has any content for the given language."""
        loc = self.get_localization(language)
        return loc is not None and not loc.is_empty()


@dataclass
class XCStringsFile:
    """Represents a complete .xcstrings file."""

    source_language: str
    strings: Dict[str, StringEntry] = field(default_factory=dict)
    version: str = "1.0"

    def get_entry(self, key: str) -> Optional[StringEntry]:
        return self.strings.get(key)

    def all_keys(self) -> List[str]:
        return sorted(self.strings)

    def all_languages(self) -> List[str]:
        """Source language plus every language used by any entry, sorted."""
        languages = {self.source_language}
        for entry in self.strings.values():
            languages.update(entry.localizations or {})
        return sorted(languages)

    def translatable_entries(self) -> Iterator[StringEntry]:
        for key in self.all_keys():
            entry = self.strings[key]
            if entry.is_translatable:
                yield entry
