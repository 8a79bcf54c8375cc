"""Writer for Apple's .xcstrings JSON format (Xcode 15+)."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.string_entry import (
    Localization,
    StringEntry,
    StringUnit,
    Variation,
    XCStringsFile,
)


class XCStringsWriter:
    """Writer for .xcstrings files."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def write(self, xcstrings: XCStringsFile, output_path: str) -> None:
        """
        Write an XCStringsFile to disk.

        Args:
            xcstrings: The XCStringsFile to write
            output_path: Path to write the file to
        """
        data = self._to_dict(xcstrings)

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=self.indent, ensure_ascii=False)
            f.write("\n")  # Trailing newline

    def to_string(self, xcstrings: XCStringsFile) -> str:
        """
        Convert an XCStringsFile to a JSON string.

        Args:
            xcstrings: The XCStringsFile to convert

        Returns:
            JSON string representation
        """
        data = self._to_dict(xcstrings)
        return json.dumps(data, indent=self.indent, ensure_ascii=False)

    def _to_dict(self, xcstrings: XCStringsFile) -> Dict[str, Any]:
        """Convert XCStringsFile to dictionary for JSON serialization."""
        # Sort strings by key for consistent output
        strings_dict = {}
        for key in xcstrings.all_keys():
            strings_dict[key] = self._entry_to_dict(xcstrings.strings[key])

        return {
            "sourceLanguage": xcstrings.source_language,
            "strings": strings_dict,
            "version": xcstrings.version,
        }

    def _entry_to_dict(self, entry: StringEntry) -> Dict[str, Any]:
        """Convert a StringEntry to dictionary."""
        entry_dict: Dict[str, Any] = {}

        if entry.comment:
            entry_dict["comment"] = entry.comment

        if entry.extraction_state:
            entry_dict["extractionState"] = entry.extraction_state

        if entry.localizations:
            localizations_dict = {}
            for lang in sorted(entry.localizations):
                loc_dict = self._localization_to_dict(entry.localizations[lang])
                if loc_dict:  # Only include non-empty localizations
                    localizations_dict[lang] = loc_dict

            if localizations_dict:
                entry_dict["localizations"] = localizations_dict

        if entry.should_translate is not None:
            entry_dict["shouldTranslate"] = entry.should_translate

        return entry_dict

    def _localization_to_dict(self, loc: Localization) -> Dict[str, Any]:
        """Convert a Localization to dictionary."""
        loc_dict: Dict[str, Any] = {}

        unit_dict = self._unit_to_dict(loc.string_unit)
        if unit_dict:
            loc_dict["stringUnit"] = unit_dict

        if loc.variations:
            variations_dict = {}
            for name, variants in (
                ("device", loc.variations.device),
                ("plural", loc.variations.plural),
            ):
                variants_dict = self._variants_to_dict(variants)
                if variants_dict:
                    variations_dict[name] = variants_dict
            if variations_dict:
                loc_dict["variations"] = variations_dict

        return loc_dict

    def _variants_to_dict(self, variants: Optional[Dict[str, Variation]]) -> Dict[str, Any]:
        variants_dict = {}
        for name in sorted(variants or {}):
            unit_dict = self._unit_to_dict(variants[name].string_unit)
            if unit_dict:
                variants_dict[name] = {"stringUnit": unit_dict}
        return variants_dict

    def _unit_to_dict(self, unit: Optional[StringUnit]) -> Optional[Dict[str, str]]:
        # not_translated and source only exist in memory
        if unit is None or not unit.state.persistable:
            return None
        return {
            "state": unit.state.value,
            "value": unit.value,
        }
