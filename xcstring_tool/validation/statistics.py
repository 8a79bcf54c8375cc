"""Per-language progress statistics and diagnostics for a catalog."""

from dataclasses import dataclass
from typing import List

from ..editing.state import derive_state
from ..models.string_entry import PluralForm, UnitState, XCStringsFile
from .format_specifiers import FormatIssue, FormatSpecifierValidator


@dataclass
class LanguageStatistics:
    """Translation progress of one language."""

    language: str
    total: int = 0
    translated: int = 0
    needs_review: int = 0
    stale: int = 0
    missing: int = 0

    @property
    def percentage(self) -> float:
        if not self.total:
            return 0.0
        return round(self.translated / self.total * 100, 1)


@dataclass
class FormatMismatch:
    """A translation whose format specifiers disagree with its source."""

    key: str
    language: str
    source: str
    translation: str
    issues: List[FormatIssue]


def get_statistics(catalog: XCStringsFile, language: str) -> LanguageStatistics:
    """
    Count translation progress for a language.

    Entries marked "do not translate" are skipped. Every counted entry of the
    source language is translated. For other languages a missing or empty
    localization is missing; otherwise the derived state decides, with "new"
    counting as translated.
    """
    stats = LanguageStatistics(language=language)
    is_base_language = language == catalog.source_language

    for entry in catalog.translatable_entries():
        stats.total += 1

        if is_base_language:
            stats.translated += 1
            continue

        loc = entry.get_localization(language)
        if loc is None or loc.is_empty():
            stats.missing += 1
            continue

        state = derive_state(loc, is_base_language=False)
        if state in (UnitState.TRANSLATED, UnitState.NEW):
            stats.translated += 1
        elif state == UnitState.NEEDS_REVIEW:
            stats.needs_review += 1
        elif state == UnitState.STALE:
            stats.stale += 1
        else:
            stats.missing += 1

    return stats


def get_all_statistics(catalog: XCStringsFile) -> List[LanguageStatistics]:
    return [get_statistics(catalog, language) for language in catalog.all_languages()]


def get_missing_translations(catalog: XCStringsFile, language: str) -> List[str]:
    """Keys of translatable entries with no content for a language, sorted."""
    return [
        entry.key
        for entry in catalog.translatable_entries()
        if not entry.has_translation(language)
    ]


def find_format_issues(catalog: XCStringsFile, language: str) -> List[FormatMismatch]:
    """
    Find translations that break the format specifiers of their source value.

    Standard units, device variants and the plural "other" form are checked;
    the remaining plural forms may legitimately drop the count.
    """
    validator = FormatSpecifierValidator()
    mismatches = []

    if language == catalog.source_language:
        return mismatches

    for entry in catalog.translatable_entries():
        loc = entry.get_localization(language)
        if loc is None:
            continue
        source = entry.get_source_value(catalog.source_language)

        candidates = []
        if loc.string_unit is not None:
            candidates.append(loc.string_unit.value)
        if loc.variations is not None:
            plural = loc.variations.plural or {}
            if PluralForm.OTHER.value in plural:
                candidates.append(plural[PluralForm.OTHER.value].string_unit.value)
            device = loc.variations.device or {}
            candidates.extend(device[name].string_unit.value for name in sorted(device))

        for translation in candidates:
            if not translation:
                continue
            is_valid, issues = validator.validate(source, translation)
            if not is_valid:
                mismatches.append(
                    FormatMismatch(
                        key=entry.key,
                        language=language,
                        source=source,
                        translation=translation,
                        issues=issues,
                    )
                )

    return mismatches
