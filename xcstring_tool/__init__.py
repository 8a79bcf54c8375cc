"""Edit Apple .xcstrings localization catalogs."""

__version__ = "0.1.0"
