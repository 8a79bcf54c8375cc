"""Error types raised or reported by the catalog engine."""


class XCStringError(Exception):
    """Base class for catalog errors."""


class DecodeError(XCStringError, ValueError):
    """The file is not valid JSON or does not match the .xcstrings schema."""


class NotFoundError(XCStringError, LookupError):
    """An operation referenced a key or language that does not exist."""

    def __str__(self) -> str:
        # LookupError would repr() the message
        return str(self.args[0]) if self.args else ""


class InvalidArgumentError(XCStringError, ValueError):
    """An operation would break a catalog invariant."""
