"""Service for remembering recently opened catalog files."""

import json
import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


class RecentFiles:
    """
    Most-recently-opened-first list of catalog paths, persisted as JSON.

    Paths are compared case-insensitively. The list is never trimmed
    automatically. Problems reading or writing the history file are logged
    and otherwise ignored.
    """

    def __init__(self, history_file: Union[str, Path]):
        self.history_file = Path(history_file)

    def entries(self) -> List[str]:
        """Load the list from disk."""
        if not self.history_file.exists():
            return []
        try:
            data = json.loads(self.history_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading file history: %s", e)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring malformed file history in %s", self.history_file)
            return []
        return [str(path) for path in data if isinstance(path, str)]

    def _store(self, paths: List[str]) -> None:
        try:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            self.history_file.write_text(json.dumps(paths, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Error saving file history: %s", e)

    def add(self, path: Union[str, Path]) -> List[str]:
        """
        Move a path to the front of the list.

        Args:
            path: Catalog path; made absolute before storing

        Returns:
            The updated list
        """
        new_path = str(Path(path).expanduser().absolute())
        history = [p for p in self.entries() if p.lower() != new_path.lower()]
        history.insert(0, new_path)
        self._store(history)
        return history

    def remove(self, path: Union[str, Path]) -> bool:
        """Forget a path. Returns True if it was in the list."""
        target = str(Path(path).expanduser().absolute()).lower()
        history = self.entries()
        remaining = [p for p in history if p.lower() != target]
        if len(remaining) == len(history):
            return False
        self._store(remaining)
        return True

    def prune(self) -> List[str]:
        """Drop paths that no longer exist on disk and return them."""
        history = self.entries()
        missing = [p for p in history if not Path(p).exists()]
        if missing:
            self._store([p for p in history if p not in missing])
        return missing

    def clear(self) -> None:
        self._store([])
