"""Reading and writing of .xcstrings catalog files."""

from .xcstrings_parser import XCStringsParser
from .xcstrings_writer import XCStringsWriter

__all__ = ["XCStringsParser", "XCStringsWriter"]
