"""Test the recently opened files list."""

import json

from xcstring_tool.services import RecentFiles


def test_empty_when_missing(tmp_path):
    assert RecentFiles(tmp_path / "history.json").entries() == []


def test_add_puts_most_recent_first(tmp_path):
    history = RecentFiles(tmp_path / "history.json")
    first = tmp_path / "A.xcstrings"
    second = tmp_path / "B.xcstrings"

    history.add(first)
    history.add(second)

    assert history.entries() == [str(second), str(first)]
    assert json.loads((tmp_path / "history.json").read_text()) == [str(second), str(first)]


def test_add_deduplicates_case_insensitively(tmp_path):
    history = RecentFiles(tmp_path / "history.json")
    lower = tmp_path / "app" / "localizable.xcstrings"
    upper = tmp_path / "app" / "Localizable.xcstrings"
    other = tmp_path / "Other.xcstrings"

    history.add(lower)
    history.add(other)
    history.add(upper)

    assert history.entries() == [str(upper), str(other)]


def test_relative_paths_are_stored_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    history = RecentFiles(tmp_path / "history.json")

    history.add("Localizable.xcstrings")

    assert history.entries() == [str(tmp_path / "Localizable.xcstrings")]


def test_corrupt_history_is_ignored(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json")
    history = RecentFiles(path)

    assert history.entries() == []
    history.add(tmp_path / "A.xcstrings")
    assert len(history.entries()) == 1


def test_non_list_history_is_ignored(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"files": []}))
    assert RecentFiles(path).entries() == []


def test_remove_and_clear(tmp_path):
    history = RecentFiles(tmp_path / "history.json")
    history.add(tmp_path / "A.xcstrings")
    history.add(tmp_path / "B.xcstrings")

    assert history.remove(tmp_path / "a.XCSTRINGS")
    assert not history.remove(tmp_path / "C.xcstrings")
    assert history.entries() == [str(tmp_path / "B.xcstrings")]

    history.clear()
    assert history.entries() == []


def test_prune_drops_missing_files(tmp_path):
    existing = tmp_path / "A.xcstrings"
    existing.write_text("{}")
    history = RecentFiles(tmp_path / "history.json")
    history.add(existing)
    history.add(tmp_path / "Gone.xcstrings")

    removed = history.prune()

    assert removed == [str(tmp_path / "Gone.xcstrings")]
    assert history.entries() == [str(existing)]
