"""Test reading and writing .xcstrings files."""

import json

import pytest

from xcstring_tool.errors import DecodeError
from xcstring_tool.extraction import XCStringsParser, XCStringsWriter
from xcstring_tool.models import Localization, StringEntry, StringUnit, UnitState, XCStringsFile


def test_round_trip_keeps_structure(catalog):
    writer = XCStringsWriter()
    parser = XCStringsParser()

    reparsed = parser.parse_string(writer.to_string(catalog))

    assert reparsed == catalog
    assert writer.to_string(reparsed) == writer.to_string(catalog)


def test_round_trip_matches_input_document(sample_data):
    parser = XCStringsParser()
    written = json.loads(XCStringsWriter().to_string(parser.parse_string(json.dumps(sample_data))))
    assert written == sample_data


def test_parse_reads_variations(catalog):
    de = catalog.strings["%d items"].localizations["de"]
    assert de.string_unit is None
    assert de.variations.plural["other"].string_unit.value == "%d Elemente"
    assert de.variations.device is None

    device = catalog.strings["Open on your device"].localizations["de"].variations.device
    assert device["iphone"].string_unit.state == UnitState.STALE


def test_parse_keeps_flags_and_passthrough_fields(catalog):
    assert catalog.strings["MintDeck"].should_translate is False
    assert catalog.strings["MintDeck"].localizations is None
    assert catalog.strings["Hello"].extraction_state == "manual"
    assert catalog.version == "1.0"


def test_parse_accepts_unknown_form_names():
    content = json.dumps({
        "sourceLanguage": "en",
        "version": "1.1",
        "strings": {
            "x": {
                "localizations": {
                    "en": {
                        "variations": {
                            "device": {"vision": {"stringUnit": {"state": "new", "value": "Vision"}}}
                        }
                    }
                }
            }
        },
    })
    catalog = XCStringsParser().parse_string(content)
    assert "vision" in catalog.strings["x"].localizations["en"].variations.device
    assert catalog.version == "1.1"


def test_parse_normalizes_empty_containers():
    content = json.dumps({
        "sourceLanguage": "en",
        "version": "1.0",
        "strings": {
            "a": {"localizations": {}},
            "b": {"localizations": {"fr": {"variations": {"plural": {}}}}},
        },
    })
    catalog = XCStringsParser().parse_string(content)
    assert catalog.strings["a"].localizations is None
    assert catalog.strings["b"].localizations["fr"].variations is None


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[]",
        json.dumps({"strings": {}}),
        json.dumps({"sourceLanguage": "en"}),
        json.dumps({"sourceLanguage": "en", "strings": {"a": "oops"}}),
        json.dumps({"sourceLanguage": "en", "strings": {"a": {"shouldTranslate": "no"}}}),
        json.dumps({
            "sourceLanguage": "en",
            "strings": {"a": {"localizations": {"fr": {"stringUnit": {"value": "x"}}}}},
        }),
        json.dumps({
            "sourceLanguage": "en",
            "strings": {"a": {"localizations": {"fr": {"stringUnit": {"state": "source", "value": "x"}}}}},
        }),
        json.dumps({
            "sourceLanguage": "en",
            "strings": {"a": {"localizations": {"fr": {"variations": {"plural": {"one": {}}}}}}},
        }),
    ],
)
def test_parse_rejects_invalid_documents(content):
    with pytest.raises(DecodeError):
        XCStringsParser().parse_string(content)


def test_parse_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        XCStringsParser().parse(str(tmp_path / "nope.xcstrings"))


def test_parse_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "Latin1.xcstrings"
    path.write_bytes(b'{"sourceLanguage": "en", "strings": {"\xff": {}}}')

    with pytest.raises(DecodeError, match="Invalid UTF-8"):
        XCStringsParser().parse(str(path))


def test_writer_omits_derived_states():
    catalog = XCStringsFile(
        source_language="en",
        strings={
            "Hello": StringEntry(
                key="Hello",
                localizations={
                    "en": Localization(string_unit=StringUnit("Hello", UnitState.NEW)),
                    "fr": Localization(string_unit=StringUnit("", UnitState.NOT_TRANSLATED)),
                    "de": Localization(string_unit=StringUnit("Hallo", UnitState.SOURCE)),
                },
            )
        },
    )
    data = json.loads(XCStringsWriter().to_string(catalog))
    assert list(data["strings"]["Hello"]["localizations"]) == ["en"]


def test_writer_sorts_and_writes_trailing_newline(tmp_path, catalog):
    output = tmp_path / "out" / "Localizable.xcstrings"
    XCStringsWriter().write(catalog, str(output))

    text = output.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert "Auf dem iPhone öffnen" in text
    data = json.loads(text)
    assert list(data) == ["sourceLanguage", "strings", "version"]
    assert list(data["strings"]) == sorted(data["strings"])
