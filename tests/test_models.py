"""Test document model navigation helpers."""

from xcstring_tool.models import (
    Localization,
    StringEntry,
    StringUnit,
    UnitState,
    Variation,
    Variations,
    XCStringsFile,
)


def test_all_languages_includes_source_and_is_sorted(catalog):
    assert catalog.all_languages() == ["de", "en", "fr"]


def test_all_languages_without_entries():
    catalog = XCStringsFile(source_language="pt")
    assert catalog.all_languages() == ["pt"]


def test_all_keys_sorted(catalog):
    assert catalog.all_keys() == sorted(catalog.strings)


def test_get_entry(catalog):
    assert catalog.get_entry("Hello").comment == "Greeting on the home screen"
    assert catalog.get_entry("Missing") is None


def test_translatable_entries_skip_do_not_translate(catalog):
    keys = [entry.key for entry in catalog.translatable_entries()]
    assert "MintDeck" not in keys
    assert "Hello" in keys


def test_all_units_order_standard_plural_device():
    loc = Localization(
        string_unit=StringUnit(value="std", state=UnitState.STALE),
        variations=Variations(
            plural={
                "other": Variation(StringUnit("many things", UnitState.TRANSLATED)),
                "one": Variation(StringUnit("one thing", UnitState.NEW)),
            },
            device={"iphone": Variation(StringUnit("phone", UnitState.NEEDS_REVIEW))},
        ),
    )
    assert loc.all_values() == ["std", "one thing", "many things", "phone"]


def test_localization_is_empty():
    assert Localization().is_empty()
    assert Localization(string_unit=StringUnit(value="", state=UnitState.NOT_TRANSLATED)).is_empty()
    assert not Localization(string_unit=StringUnit(value="Hallo")).is_empty()
    assert Localization(variations=Variations(plural={})).is_empty()
    assert not Localization(
        variations=Variations(device={"mac": Variation(StringUnit("Mac"))})
    ).is_empty()


def test_entry_source_value_falls_back_to_key():
    entry = StringEntry(key="Settings")
    assert entry.get_source_value("en") == "Settings"
    assert not entry.has_translation("de")


def test_unit_state_persistable():
    persisted = {state.value for state in UnitState if state.persistable}
    assert persisted == {"new", "translated", "needs_review", "stale"}
