"""Invariant-preserving edits of an in-memory .xcstrings catalog."""

import functools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..errors import InvalidArgumentError, NotFoundError, XCStringError
from ..models.string_entry import (
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
from ..validation.plural_heuristics import (
    detect_duplicates_across_forms,
    forms_for_language,
    looks_plural,
    singular_from_key,
    singularize,
)
from .state import determine_new_state

logger = logging.getLogger(__name__)


@dataclass
class EditResult:
    """Outcome of a catalog edit."""

    success: bool
    error: Optional[XCStringError] = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""


def _reports_failure(method: Callable[..., None]) -> Callable[..., EditResult]:
    """Turn NotFoundError/InvalidArgumentError raised by an edit into a failed result."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs) -> EditResult:
        try:
            method(self, *args, **kwargs)
        except (NotFoundError, InvalidArgumentError) as e:
            logger.debug("%s rejected: %s", method.__name__, e)
            return EditResult(success=False, error=e)
        return EditResult(success=True)

    return wrapper


def _stored_state(state: UnitState) -> UnitState:
    # Base-language content derives back to SOURCE from TRANSLATED
    return UnitState.TRANSLATED if state == UnitState.SOURCE else state


class CatalogEditor:
    """
    Applies edits to one catalog while keeping it structurally clean.

    Every edit that can fail returns an EditResult instead of raising, so the
    caller decides whether a rejected edit is worth showing. The low-level
    setters never resolve the standard/variations exclusivity on their own:
    call clear_variations() or clear_standard_translation() first when
    switching a localization between modes.
    """

    def __init__(self, catalog: XCStringsFile):
        self.catalog = catalog

    # Traversal helpers

    def _entry(self, key: str) -> StringEntry:
        entry = self.catalog.get_entry(key)
        if entry is None:
            raise NotFoundError(f"Key not found: {key!r}")
        return entry

    def _localization(
        self, entry: StringEntry, language: str, create: bool = False
    ) -> Optional[Localization]:
        """Look up, or with create=True build, the localization of an entry."""
        if entry.localizations is None:
            if not create:
                return None
            entry.localizations = {}
        loc = entry.localizations.get(language)
        if loc is None and create:
            loc = entry.localizations[language] = Localization()
        return loc

    def _variants(
        self, entry: StringEntry, language: str, kind: VariationKind, create: bool = False
    ) -> Optional[Dict[str, Variation]]:
        """Look up, or with create=True build, a plural/device map of an entry."""
        loc = self._localization(entry, language, create=create)
        if loc is None:
            return None
        if loc.variations is None:
            if not create:
                return None
            loc.variations = Variations()
        variants = loc.variations.get(kind)
        if variants is None and create:
            variants = {}
            loc.variations.put(kind, variants)
        return variants

    def _drop_variant(
        self, entry: StringEntry, language: str, kind: VariationKind, form: str
    ) -> None:
        loc = self._localization(entry, language)
        if loc is None or loc.variations is None:
            return
        variants = loc.variations.get(kind)
        if variants:
            variants.pop(form, None)
        if not variants:
            loc.variations.put(kind, None)
        if loc.variations.is_empty():
            loc.variations = None

    def _clean(self, entry: StringEntry, language: str) -> None:
        loc = self._localization(entry, language)
        if loc is None:
            return
        if loc.variations is not None and loc.variations.is_empty():
            loc.variations = None
        if loc.is_empty():
            del entry.localizations[language]
            if not entry.localizations:
                entry.localizations = None

    # Standard units

    @_reports_failure
    def set_standard_translation(
        self,
        key: str,
        language: str,
        value: str,
        state: UnitState = UnitState.TRANSLATED,
    ) -> None:
        """Create or overwrite the standard unit of (key, language)."""
        entry = self._entry(key)
        loc = self._localization(entry, language, create=True)
        loc.string_unit = StringUnit(value=value, state=_stored_state(state))

    @_reports_failure
    def clear_standard_translation(self, key: str, language: str) -> None:
        entry = self._entry(key)
        loc = self._localization(entry, language)
        if loc is not None:
            loc.string_unit = None

    # Variations

    @_reports_failure
    def set_variant_translation(
        self,
        key: str,
        language: str,
        kind: VariationKind,
        form: str,
        value: str,
        state: UnitState = UnitState.TRANSLATED,
    ) -> None:
        """
        Create or overwrite one plural form or device variant.

        An empty value removes the variant instead; empty maps and an empty
        variations object are dropped afterwards.
        """
        kind = VariationKind(kind)
        entry = self._entry(key)
        if value == "":
            self._drop_variant(entry, language, kind, form)
            return
        variants = self._variants(entry, language, kind, create=True)
        variants[form] = Variation(string_unit=StringUnit(value=value, state=_stored_state(state)))

    @_reports_failure
    def remove_variant(self, key: str, language: str, kind: VariationKind, form: str) -> None:
        self._drop_variant(self._entry(key), language, VariationKind(kind), form)

    @_reports_failure
    def clear_variations(self, key: str, language: str) -> None:
        entry = self._entry(key)
        loc = self._localization(entry, language)
        if loc is not None:
            loc.variations = None

    # Languages

    @_reports_failure
    def add_language(self, code: str) -> None:
        """Register a language by adding a placeholder to every translatable entry."""
        if not code:
            raise InvalidArgumentError("Language code must not be empty")
        if code in self.catalog.all_languages():
            raise InvalidArgumentError(f"Language '{code}' already exists")

        for entry in self.catalog.translatable_entries():
            loc = self._localization(entry, code, create=True)
            loc.string_unit = StringUnit(value="", state=UnitState.NOT_TRANSLATED)
        logger.info("Added language %s", code)

    @_reports_failure
    def remove_language(self, code: str) -> None:
        if code == self.catalog.source_language:
            raise InvalidArgumentError(f"Cannot remove the source language '{code}'")
        if code not in self.catalog.all_languages():
            raise NotFoundError(f"Language not found: {code!r}")

        for entry in self.catalog.strings.values():
            if entry.localizations and code in entry.localizations:
                del entry.localizations[code]
                if not entry.localizations:
                    entry.localizations = None
        logger.info("Removed language %s", code)

    # Keys

    @_reports_failure
    def add_key(self, key: str, comment: Optional[str] = None) -> None:
        """Add an entry seeded with its own key as the source value."""
        if not key:
            raise InvalidArgumentError("Key must not be empty")
        if key in self.catalog.strings:
            raise InvalidArgumentError(f"Key already exists: {key!r}")

        source = self.catalog.source_language
        localizations = {
            source: Localization(string_unit=StringUnit(value=key, state=UnitState.NEW))
        }
        for language in self.catalog.all_languages():
            if language != source:
                localizations[language] = Localization()

        self.catalog.strings[key] = StringEntry(
            key=key,
            comment=comment,
            localizations=localizations,
        )
        logger.debug("Added key %r", key)

    @_reports_failure
    def remove_key(self, key: str) -> None:
        self._entry(key)
        del self.catalog.strings[key]
        logger.debug("Removed key %r", key)

    @_reports_failure
    def lock(self, key: str) -> None:
        """Mark an entry "do not translate" and drop its localizations."""
        entry = self._entry(key)
        entry.should_translate = False
        entry.localizations = None

    @_reports_failure
    def unlock(self, key: str) -> None:
        self._entry(key).should_translate = None

    # Bulk operations

    def copy_translations(
        self,
        from_language: str,
        to_language: str,
        overwrite_existing: bool = False,
        new_state: UnitState = UnitState.NEEDS_REVIEW,
    ) -> int:
        """
        Copy content of one language into another for every translatable entry.

        The standard unit and each plural form and device kind are copied on
        their own, and only when the destination slot is empty or
        overwrite_existing is set. Copies always get new_state.

        Returns:
            Number of units copied
        """
        if from_language == to_language:
            return 0

        state = _stored_state(new_state)
        copied = 0

        for entry in self.catalog.translatable_entries():
            source_loc = entry.get_localization(from_language)
            if source_loc is None:
                continue

            source_unit = source_loc.string_unit
            if source_unit is not None:
                target = entry.get_localization(to_language)
                if overwrite_existing or target is None or target.string_unit is None:
                    target = self._localization(entry, to_language, create=True)
                    target.string_unit = StringUnit(value=source_unit.value, state=state)
                    copied += 1

            if source_loc.variations is None:
                continue
            for kind in VariationKind:
                source_variants = source_loc.variations.get(kind) or {}
                for form in sorted(source_variants):
                    existing = self._variants(entry, to_language, kind) or {}
                    if not overwrite_existing and form in existing:
                        continue
                    variants = self._variants(entry, to_language, kind, create=True)
                    variants[form] = Variation(
                        string_unit=StringUnit(
                            value=source_variants[form].string_unit.value, state=state
                        )
                    )
                    copied += 1

        logger.info("Copied %d units from %s to %s", copied, from_language, to_language)
        return copied

    @_reports_failure
    def clean_empty_structures(self, key: str, language: str) -> None:
        """Drop empty variations, then the whole localization if nothing is left."""
        self._clean(self._entry(key), language)

    # Plural heuristics

    @_reports_failure
    def detect_and_create_plural_forms(self, key: str, language: str) -> None:
        """
        Turn a localization into a plural skeleton for its language.

        A standard unit becomes the "other" form. Missing "one" forms get a
        naive singular of "other" (or of the key) marked needs_review, any
        other missing form is created empty with state new.
        """
        entry = self._entry(key)
        if not looks_plural(key):
            raise InvalidArgumentError(f"Key does not look pluralizable: {key!r}")

        other = PluralForm.OTHER.value
        loc = self._localization(entry, language)
        if loc is not None and loc.string_unit is not None:
            existing = self._variants(entry, language, VariationKind.PLURAL) or {}
            if other not in existing:
                unit = loc.string_unit
                if unit.value:
                    promoted = self._variants(entry, language, VariationKind.PLURAL, create=True)
                    promoted[other] = Variation(
                        string_unit=StringUnit(value=unit.value, state=unit.state)
                    )
                loc.string_unit = None

        variants = self._variants(entry, language, VariationKind.PLURAL, create=True)
        for form in forms_for_language(language):
            if form.value in variants:
                continue
            if form == PluralForm.ONE:
                if other in variants:
                    value = singularize(variants[other].string_unit.value)
                else:
                    value = singular_from_key(key)
                unit = StringUnit(value=value, state=UnitState.NEEDS_REVIEW)
            else:
                unit = StringUnit(value="", state=UnitState.NEW)
            variants[form.value] = Variation(string_unit=unit)

    def _mark_duplicates(self, entry: StringEntry, language: str) -> int:
        loc = self._localization(entry, language)
        if loc is None or loc.variations is None:
            return 0

        plural = loc.variations.plural or {}
        device = loc.variations.device or {}
        duplicates = detect_duplicates_across_forms(
            {form: v.string_unit.value for form, v in plural.items()},
            {kind: v.string_unit.value for kind, v in device.items()},
        )

        marked = 0
        for variants in (plural, device):
            for variation in variants.values():
                if variation.string_unit.value in duplicates:
                    variation.string_unit.state = UnitState.NEEDS_REVIEW
                    marked += 1
        return marked

    @_reports_failure
    def mark_duplicate_forms(self, key: str, language: str) -> None:
        """Flag every variant whose value repeats within the same localization."""
        marked = self._mark_duplicates(self._entry(key), language)
        if marked:
            logger.debug("Marked %d duplicate variants of %r for review", marked, key)

    # Editor save flows

    @_reports_failure
    def commit_standard_edit(self, key: str, language: str, value: str) -> None:
        """
        Save a plain value the way an interactive editor does.

        Variations are dropped, the state comes from determine_new_state, and
        an empty value clears the unit and prunes the localization.
        """
        entry = self._entry(key)
        loc = self._localization(entry, language)
        if loc is not None:
            loc.variations = None

        if value:
            state = determine_new_state(self.catalog, key, language, value)
            loc = self._localization(entry, language, create=True)
            loc.string_unit = StringUnit(value=value, state=_stored_state(state))
        elif loc is not None:
            loc.string_unit = None

        self._clean(entry, language)

    @_reports_failure
    def commit_variant_edit(
        self,
        key: str,
        language: str,
        plural_values: Dict[str, str],
        device_values: Dict[str, str],
    ) -> None:
        """
        Save a set of plural/device values the way an interactive editor does.

        The standard unit is dropped, empty values remove their variant, and
        values repeated across variants are flagged for review.
        """
        entry = self._entry(key)
        loc = self._localization(entry, language)
        if loc is not None:
            loc.string_unit = None

        for kind, values in (
            (VariationKind.PLURAL, plural_values),
            (VariationKind.DEVICE, device_values),
        ):
            for form in sorted(values):
                value = values[form]
                if not form:
                    continue
                if not value:
                    self._drop_variant(entry, language, kind, form)
                    continue
                state = determine_new_state(self.catalog, key, language, value)
                variants = self._variants(entry, language, kind, create=True)
                variants[form] = Variation(
                    string_unit=StringUnit(value=value, state=_stored_state(state))
                )

        self._mark_duplicates(entry, language)
        self._clean(entry, language)
