"""Derivation of the effective translation state of a localization."""

from typing import Optional

from ..models.string_entry import Localization, UnitState, XCStringsFile


def derive_state(localization: Optional[Localization], is_base_language: bool) -> UnitState:
    """
    Compute the translation state shown for a localization.

    Only the first unit of ``Localization.all_units()`` is consulted: the
    standard unit, otherwise the first plural form, otherwise the first device
    kind. Other variants do not influence the result.

    Args:
        localization: The localization to inspect, or None if absent
        is_base_language: Whether the localization belongs to the source language

    Returns:
        The stored state of the sampled unit, ``SOURCE`` for translated or
        empty base-language content, ``NOT_TRANSLATED`` when nothing exists
    """
    units = localization.all_units() if localization is not None else []

    if not units:
        return UnitState.SOURCE if is_base_language else UnitState.NOT_TRANSLATED

    state = units[0].state
    if state == UnitState.TRANSLATED and is_base_language:
        return UnitState.SOURCE
    return state


def determine_new_state(
    catalog: XCStringsFile, key: str, language: str, candidate_value: str
) -> UnitState:
    """
    Pick the state for a value about to be written by an editor.

    A value that already appears in another language of the same entry is
    probably copied or left untranslated, so it is flagged for review.
    """
    if language == catalog.source_language:
        return UnitState.SOURCE

    entry = catalog.get_entry(key)
    if entry is None or not entry.localizations:
        return UnitState.TRANSLATED

    for other_language, localization in entry.localizations.items():
        if other_language == language:
            continue
        if candidate_value in localization.all_values():
            return UnitState.NEEDS_REVIEW

    return UnitState.TRANSLATED
