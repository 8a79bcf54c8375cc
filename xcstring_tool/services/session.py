"""Editing session holding one loaded catalog."""

import logging
from pathlib import Path
from typing import Optional, Union

from ..editing.editor import CatalogEditor
from ..errors import DecodeError, NotFoundError
from ..extraction.xcstrings_parser import XCStringsParser
from ..extraction.xcstrings_writer import XCStringsWriter
from ..models.string_entry import XCStringsFile
from .recent_files import RecentFiles

logger = logging.getLogger(__name__)


class EditingSession:
    """
    Owns the catalog being edited and where it came from.

    Sessions share nothing, several catalogs may be open at once.
    """

    def __init__(self, recent_files: Optional[RecentFiles] = None, indent: int = 2):
        self.recent_files = recent_files
        self.parser = XCStringsParser()
        self.writer = XCStringsWriter(indent=indent)
        self.path: Optional[Path] = None
        self.catalog: Optional[XCStringsFile] = None

    @property
    def is_open(self) -> bool:
        return self.catalog is not None

    @property
    def editor(self) -> CatalogEditor:
        if self.catalog is None:
            raise NotFoundError("No catalog is open")
        return CatalogEditor(self.catalog)

    def load(self, path: Union[str, Path]) -> XCStringsFile:
        """
        Load a catalog, replacing the current one on success.

        Args:
            path: Path to the .xcstrings file

        Returns:
            The loaded catalog

        Raises:
            DecodeError: If the file is not a valid catalog
            OSError: If the file cannot be read
        """
        path = Path(path)
        try:
            catalog = self.parser.parse(str(path))
        except (DecodeError, OSError) as e:
            logger.error("Error loading %s: %s", path, e)
            raise

        self.catalog = catalog
        self.path = path
        if self.recent_files is not None:
            self.recent_files.add(path)

        logger.info("Loaded %s with %d strings", path, len(catalog.strings))
        return catalog

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the catalog back to disk, by default to where it was loaded from.

        Raises:
            NotFoundError: If no catalog is open or no path is known
            OSError: If the file cannot be written
        """
        if self.catalog is None:
            raise NotFoundError("No catalog is open")

        target = Path(path) if path is not None else self.path
        if target is None:
            raise NotFoundError("No path to save to")

        try:
            self.writer.write(self.catalog, str(target))
        except OSError as e:
            logger.error("Error saving %s: %s", target, e)
            raise

        logger.info("Saved %s", target)
        return target

    def close(self, save: bool = False) -> None:
        """Drop the catalog, optionally writing it first."""
        if save and self.catalog is not None:
            self.save()
        self.catalog = None
        self.path = None
