"""
Custom exceptions for the bitwise flags library.
"""

from typing import Any


class BitwiseError(Exception):
    """Base exception for all bitwise flag errors."""
    pass


class InvalidFlagDefinition(BitwiseError, ValueError):
    """
    Raised when a flag set is built from an invalid definition.

    Covers empty or duplicate names and values that are not positive
    powers of two. Construction fails on the first violation; nothing is
    coerced.
    """

    def __init__(self, message: str, name: Any = None, value: Any = None):
        self.name = name
        self.value = value
        super().__init__(message)


class InvalidFlagSyntax(InvalidFlagDefinition):
    """Raised when a textual 'name=value' flag definition is malformed."""

    def __init__(self, pair: str, message: str = None):
        self.pair = pair
        msg = message or f"Invalid flag format: {pair}. Expected 'name=value'."
        super().__init__(msg)


class UnknownFlag(BitwiseError, KeyError):
    """
    Raised when a flag name is not part of the governing flag set.

    Only the write path (persisting a value) and predicate translation
    raise this. Set algebra on a view ignores unknown names instead.
    """

    def __init__(self, name: str, message: str = None):
        self.name = name
        self.message = message or f"Unknown flag: {name}"
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError would quote the message
        return self.message


class InvalidFlagType(BitwiseError, TypeError):
    """Raised when a value of an unsupported type is given where flags are expected."""

    def __init__(self, value: Any, message: str = None):
        self.value = value
        msg = message or "Invalid flag type. Expected str or Flag instance."
        super().__init__(msg)


class ImmutabilityViolation(BitwiseError, TypeError):
    """Raised on any attempt to modify a FlagSetView in place."""

    def __init__(self, message: str = None):
        msg = message or "FlagSetView is immutable. Use add() or remove() methods instead."
        super().__init__(msg)


class NotBitwiseColumn(BitwiseError, LookupError):
    """Raised when a column has no bitwise flag definition registered."""

    def __init__(self, column: str, message: str = None):
        self.column = column
        msg = message or f"Column '{column}' is not cast as bitwise"
        super().__init__(msg)
