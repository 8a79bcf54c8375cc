"""Test translation state derivation."""

from xcstring_tool.editing import derive_state, determine_new_state
from xcstring_tool.models import Localization, StringUnit, UnitState, Variation, Variations


def test_no_units_for_translation_is_not_translated():
    assert derive_state(Localization(), is_base_language=False) == UnitState.NOT_TRANSLATED
    assert derive_state(None, is_base_language=False) == UnitState.NOT_TRANSLATED


def test_no_units_for_base_language_is_source():
    assert derive_state(Localization(), is_base_language=True) == UnitState.SOURCE


def test_translated_base_language_is_source():
    loc = Localization(string_unit=StringUnit("Hello", UnitState.TRANSLATED))
    assert derive_state(loc, is_base_language=True) == UnitState.SOURCE


def test_stale_standard_unit_is_stale():
    loc = Localization(string_unit=StringUnit("Hallo", UnitState.STALE))
    assert derive_state(loc, is_base_language=False) == UnitState.STALE


def test_new_base_language_keeps_raw_state():
    loc = Localization(string_unit=StringUnit("Hello", UnitState.NEW))
    assert derive_state(loc, is_base_language=True) == UnitState.NEW


def test_only_first_unit_is_sampled():
    loc = Localization(
        variations=Variations(
            plural={
                "other": Variation(StringUnit("%d Dateien", UnitState.TRANSLATED)),
                "one": Variation(StringUnit("%d Datei", UnitState.STALE)),
            }
        )
    )
    # "one" sorts before "other"
    assert derive_state(loc, is_base_language=False) == UnitState.STALE


def test_standard_unit_wins_over_variations():
    loc = Localization(
        string_unit=StringUnit("Hallo", UnitState.NEEDS_REVIEW),
        variations=Variations(device={"mac": Variation(StringUnit("Mac", UnitState.TRANSLATED))}),
    )
    assert derive_state(loc, is_base_language=False) == UnitState.NEEDS_REVIEW


def test_plural_before_device():
    loc = Localization(
        variations=Variations(
            plural={"other": Variation(StringUnit("x", UnitState.NEW))},
            device={"iphone": Variation(StringUnit("y", UnitState.STALE))},
        )
    )
    assert derive_state(loc, is_base_language=False) == UnitState.NEW


def test_determine_new_state_source_language(catalog):
    assert determine_new_state(catalog, "Hello", "en", "Hi") == UnitState.SOURCE


def test_determine_new_state_flags_value_from_other_language(catalog):
    assert determine_new_state(catalog, "Hello", "it", "Hallo") == UnitState.NEEDS_REVIEW
    assert determine_new_state(catalog, "Hello", "fr", "Hello") == UnitState.NEEDS_REVIEW


def test_determine_new_state_ignores_own_language(catalog):
    assert determine_new_state(catalog, "Hello", "fr", "Bonjour") == UnitState.TRANSLATED


def test_determine_new_state_checks_variants(catalog):
    assert determine_new_state(catalog, "%d items", "fr", "%d Elemente") == UnitState.NEEDS_REVIEW
    assert determine_new_state(catalog, "%d items", "fr", "%d éléments") == UnitState.TRANSLATED
