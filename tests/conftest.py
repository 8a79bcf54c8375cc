"""Pytest configuration."""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from xcstring_tool.config import config  # noqa: E402
from xcstring_tool.extraction.xcstrings_parser import XCStringsParser  # noqa: E402

SAMPLE_CATALOG = {
    "sourceLanguage": "en",
    "strings": {
        "%d items": {
            "localizations": {
                "de": {
                    "variations": {
                        "plural": {
                            "one": {"stringUnit": {"state": "translated", "value": "%d Element"}},
                            "other": {"stringUnit": {"state": "translated", "value": "%d Elemente"}},
                        }
                    }
                },
                "en": {
                    "variations": {
                        "plural": {
                            "one": {"stringUnit": {"state": "translated", "value": "%d item"}},
                            "other": {"stringUnit": {"state": "translated", "value": "%d items"}},
                        }
                    }
                },
            }
        },
        "Hello": {
            "comment": "Greeting on the home screen",
            "extractionState": "manual",
            "localizations": {
                "de": {"stringUnit": {"state": "translated", "value": "Hallo"}},
                "en": {"stringUnit": {"state": "translated", "value": "Hello"}},
                "fr": {"stringUnit": {"state": "needs_review", "value": "Bonjour"}},
            },
        },
        "Open on your device": {
            "localizations": {
                "de": {
                    "variations": {
                        "device": {
                            "iphone": {"stringUnit": {"state": "stale", "value": "Auf dem iPhone öffnen"}},
                            "mac": {"stringUnit": {"state": "translated", "value": "Auf dem Mac öffnen"}},
                        }
                    }
                },
            }
        },
        "MintDeck": {
            "shouldTranslate": False,
        },
    },
    "version": "1.0",
}


@pytest.fixture(autouse=True)
def isolated_history(tmp_path, monkeypatch):
    """Keep the recent-files list out of the real home directory."""
    history_file = tmp_path / "history.json"
    monkeypatch.setattr(config, "history_file", history_file)
    return history_file


@pytest.fixture
def sample_data():
    return json.loads(json.dumps(SAMPLE_CATALOG))


@pytest.fixture
def catalog(sample_data):
    return XCStringsParser().parse_string(json.dumps(sample_data))


@pytest.fixture
def catalog_path(tmp_path, sample_data):
    path = tmp_path / "Localizable.xcstrings"
    path.write_text(json.dumps(sample_data, ensure_ascii=False), encoding="utf-8")
    return path
