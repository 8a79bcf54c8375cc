"""Parser for Apple's .xcstrings JSON format (Xcode 15+)."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DecodeError
from ..models.string_entry import (
    Localization,
    StringEntry,
    StringUnit,
    UnitState,
    Variation,
    Variations,
    XCStringsFile,
)

PERSISTED_STATES = {state.value: state for state in UnitState if state.persistable}


class XCStringsParser:
    """Parser for .xcstrings files."""

    def parse(self, file_path: str) -> XCStringsFile:
        """
        Parse an .xcstrings file and return a structured representation.

        Args:
            file_path: Path to the .xcstrings file

        Returns:
            XCStringsFile object containing all parsed data

        Raises:
            FileNotFoundError: If the file does not exist
            DecodeError: If the content is not valid UTF-8 or not a valid .xcstrings document
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8: {e}") from e

        return self.parse_string(content)

    def parse_string(self, content: str) -> XCStringsFile:
        """
        Parse .xcstrings content from a string.

        Args:
            content: JSON string content

        Returns:
            XCStringsFile object
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON: {e}") from e
        return self._parse_data(data)

    def _parse_data(self, data: Any) -> XCStringsFile:
        """Parse the JSON data structure into our model."""
        if not isinstance(data, dict):
            raise DecodeError("Top level must be an object")

        source_language = data.get("sourceLanguage")
        if not isinstance(source_language, str):
            raise DecodeError("Missing or invalid 'sourceLanguage'")

        version = data.get("version", "1.0")
        if not isinstance(version, str):
            raise DecodeError("'version' must be a string")

        strings_data = data.get("strings")
        if not isinstance(strings_data, dict):
            raise DecodeError("Missing or invalid 'strings'")

        strings = {}
        for key, entry_data in strings_data.items():
            strings[key] = self._parse_string_entry(key, entry_data)

        return XCStringsFile(
            source_language=source_language,
            strings=strings,
            version=version,
        )

    def _parse_string_entry(self, key: str, entry_data: Any) -> StringEntry:
        """Parse a single string entry."""
        where = f"strings[{key!r}]"
        _expect_object(entry_data, where)

        comment = _optional(entry_data, "comment", str, where)
        should_translate = _optional(entry_data, "shouldTranslate", bool, where)
        extraction_state = _optional(entry_data, "extractionState", str, where)

        localizations = None
        loc_map = _optional(entry_data, "localizations", dict, where)
        if loc_map:
            localizations = {}
            for lang, loc_data in loc_map.items():
                localizations[lang] = self._parse_localization(
                    loc_data, f"{where}.localizations[{lang!r}]"
                )

        return StringEntry(
            key=key,
            comment=comment,
            should_translate=should_translate,
            localizations=localizations,
            extraction_state=extraction_state,
        )

    def _parse_localization(self, loc_data: Any, where: str) -> Localization:
        """Parse a localization entry."""
        _expect_object(loc_data, where)
        string_unit = None
        variations = None

        if "stringUnit" in loc_data:
            string_unit = self._parse_string_unit(loc_data["stringUnit"], f"{where}.stringUnit")

        if "variations" in loc_data:
            variations = self._parse_variations(loc_data["variations"], f"{where}.variations")

        return Localization(string_unit=string_unit, variations=variations)

    def _parse_variations(self, data: Any, where: str) -> Optional[Variations]:
        _expect_object(data, where)
        variations = Variations(
            plural=self._parse_variant_map(data, "plural", where),
            device=self._parse_variant_map(data, "device", where),
        )
        return None if variations.is_empty() else variations

    def _parse_variant_map(
        self, data: Dict[str, Any], field_name: str, where: str
    ) -> Optional[Dict[str, Variation]]:
        raw = _optional(data, field_name, dict, where)
        if not raw:
            return None

        # Any form/device name is accepted here so newer files still open
        variants = {}
        for name, variant_data in raw.items():
            variant_where = f"{where}.{field_name}[{name!r}]"
            _expect_object(variant_data, variant_where)
            if "stringUnit" not in variant_data:
                raise DecodeError(f"{variant_where}: missing 'stringUnit'")
            variants[name] = Variation(
                string_unit=self._parse_string_unit(
                    variant_data["stringUnit"], f"{variant_where}.stringUnit"
                )
            )
        return variants

    def _parse_string_unit(self, su: Any, where: str) -> StringUnit:
        _expect_object(su, where)
        state = su.get("state")
        value = su.get("value")
        if not isinstance(value, str):
            raise DecodeError(f"{where}: missing or invalid 'value'")
        if state not in PERSISTED_STATES:
            raise DecodeError(f"{where}: unknown state {state!r}")
        return StringUnit(value=value, state=PERSISTED_STATES[state])


def _expect_object(data: Any, where: str) -> None:
    if not isinstance(data, dict):
        raise DecodeError(f"{where}: expected an object")


def _optional(data: Dict[str, Any], name: str, expected: type, where: str) -> Any:
    value = data.get(name)
    if value is not None and not isinstance(value, expected):
        raise DecodeError(f"{where}: '{name}' must be {expected.__name__}")
    return value
