"""
Read/write boundary between stored integers and flag views.

A BitwiseCast owns one FlagSet and converts in both directions:
- get(): a stored integer (or None) becomes a FlagSetView
- set(): a view, flag, name, list of names/flags or integer becomes the
  integer to store

Writes are strict: an unknown flag name raises UnknownFlag. Reads are
forgiving, see FlagSetView. A stale flag definition can still read old
data, but cannot write a name it does not know.

Usage:
    cast = BitwiseCast.auto(['read', 'write', 'delete'])
    cast.get(3).names()           # ['read', 'write']
    cast.set(['read', 'delete'])  # 5

    class PermissionsCast(BitwiseCast):
        definition = 'bitwise:read,write,delete,admin'
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Iterable, Mapping, Optional

from .flagset import FlagSet
from .parser import is_shorthand
from .view import FlagSetView

logger = logging.getLogger(__name__)


class BitwiseCast:
    """
    Converts between stored integers and FlagSetViews for one flag set.

    Subclasses may set the `definition` class attribute to any definition
    FlagSet.from_definition accepts and then be built without arguments.
    """

    definition: ClassVar[Any] = None

    def __init__(self, flags: Any = None):
        if flags is None:
            flags = type(self).definition
        self.flagset = FlagSet.from_definition(flags or {})

    @classmethod
    def flags(cls, flags: Mapping[str, int]) -> BitwiseCast:
        """Create a cast from explicit name -> value pairs."""
        return cls(FlagSet(flags))

    @classmethod
    def auto(cls, names: Iterable[str]) -> BitwiseCast:
        """Create a cast assigning 1, 2, 4, ... to names in order."""
        return cls(FlagSet.auto(names))

    @classmethod
    def from_definition(cls, definition: Any) -> Optional[BitwiseCast]:
        """
        Resolve a column definition to a cast.

        Accepts a BitwiseCast instance, a BitwiseCast subclass, or a
        'bitwise:name,name' shorthand string. Returns None for anything
        else, which means the definition is not bitwise.
        """
        if isinstance(definition, BitwiseCast):
            return definition
        if isinstance(definition, type) and issubclass(definition, BitwiseCast):
            return definition()
        if is_shorthand(definition):
            return cls(FlagSet.from_shorthand(definition))
        return None

    def get(self, value: Optional[int]) -> FlagSetView:
        """Read a stored integer. None reads as 0."""
        return FlagSetView(0 if value is None else int(value), self.flagset)

    def set(self, value: Any) -> int:
        """
        Compute the integer to store for a value.

        Raises:
            UnknownFlag: If a flag name is not part of the flag set.
            InvalidFlagType: If the value or a list element has an
                unsupported type.
        """
        result = self.flagset.resolve(value)
        if isinstance(value, int) and result & ~self.flagset.mask:
            logger.debug(
                "Storing %d with bits outside the flag set (mask %d)",
                result, self.flagset.mask,
            )
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.flagset.to_dict()!r})"
