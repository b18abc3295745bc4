"""Exceptions raised by the JSON stores and the item database."""


class DatabaseError(Exception):
    """Base class for store and item database errors."""


class ValidationError(DatabaseError, TypeError):
    """A caller supplied a value with the wrong type or shape."""


class FormatError(DatabaseError, ValueError):
    """Data read from disk does not have the expected shape."""


__all__ = ["DatabaseError", "FormatError", "ValidationError"]
