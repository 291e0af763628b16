"""
FlagSetView: an immutable snapshot of which flags are active in a raw value.

A view pairs a raw integer with the FlagSet that interprets it. The active
flags are those whose bits are fully contained in the raw value, kept in
the flag set's definition order. Bits that belong to no flag are dropped.

Every transform returns a new view, so views can be cached and shared:

    view = perms.view(7)            # read, write, delete
    admin = view.add('admin')       # value 15
    view.value                      # still 7
    view.add('admin').remove('read').names()
    # ['write', 'delete', 'admin']

Reads are forgiving: names the flag set does not know are ignored by
has/add/remove/toggle/only rather than raising.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterator, List, Union

from .exceptions import ImmutabilityViolation
from .flags import Flag

if TYPE_CHECKING:
    from .flagset import FlagSet


FlagArg = Union[str, Flag]


def _name_of(flag: FlagArg) -> str:
    return flag.name if isinstance(flag, Flag) else flag


class FlagSetView:
    """
    Immutable set of active flags over a fixed FlagSet.

    Two views are equal when their values are equal; the flag set decides
    how a value is read, not what it is.
    """

    __slots__ = ('_raw', '_flagset', '_active', '_value')

    def __init__(self, raw: int, flagset: FlagSet):
        active: Dict[str, int] = {}
        value = 0
        for name, flag_value in flagset.items():
            if (raw & flag_value) == flag_value:
                active[name] = flag_value
                value |= flag_value

        object.__setattr__(self, '_raw', raw)
        object.__setattr__(self, '_flagset', flagset)
        object.__setattr__(self, '_active', active)
        object.__setattr__(self, '_value', value)

    def _derive(self, active: Dict[str, int]) -> FlagSetView:
        value = 0
        for flag_value in active.values():
            value |= flag_value
        return FlagSetView(value, self._flagset)

    # Queries

    @property
    def raw(self) -> int:
        """The integer this view was built from, including unknown bits."""
        return self._raw

    @property
    def value(self) -> int:
        """OR of the active flag values."""
        return self._value

    @property
    def flagset(self) -> FlagSet:
        return self._flagset

    def get_value(self) -> int:
        return self._value

    def has(self, *flags: FlagArg) -> bool:
        """True if every given flag is active. No flags means True."""
        return all(_name_of(flag) in self._active for flag in flags)

    def has_any(self, *flags: FlagArg) -> bool:
        """True if at least one given flag is active. No flags means False."""
        return any(_name_of(flag) in self._active for flag in flags)

    def names(self) -> List[str]:
        return list(self._active)

    def flags(self) -> List[Flag]:
        return [Flag(name, value) for name, value in self._active.items()]

    def is_empty(self) -> bool:
        return not self._active

    def is_not_empty(self) -> bool:
        return bool(self._active)

    def to_list(self) -> List[str]:
        return self.names()

    # Transforms

    def add(self, *flags: FlagArg) -> FlagSetView:
        active = dict(self._active)
        for flag in flags:
            name = _name_of(flag)
            if name in self._flagset:
                active[name] = self._flagset[name]
        return self._derive(active)

    def remove(self, *flags: FlagArg) -> FlagSetView:
        active = dict(self._active)
        for flag in flags:
            active.pop(_name_of(flag), None)
        return self._derive(active)

    def except_(self, *flags: FlagArg) -> FlagSetView:
        """Alias of remove()."""
        return self.remove(*flags)

    def toggle(self, *flags: FlagArg) -> FlagSetView:
        active = dict(self._active)
        for flag in flags:
            name = _name_of(flag)
            if name in active:
                del active[name]
            elif name in self._flagset:
                active[name] = self._flagset[name]
        return self._derive(active)

    def only(self, *flags: FlagArg) -> FlagSetView:
        """Keep only the given flags that are already active."""
        active = {}
        for flag in flags:
            name = _name_of(flag)
            if name in self._active:
                active[name] = self._active[name]
        return self._derive(active)

    def clear(self) -> FlagSetView:
        return self._derive({})

    def all(self) -> FlagSetView:
        return self._derive(dict(self._flagset))

    # Container protocol

    def __len__(self) -> int:
        return len(self._active)

    def __iter__(self) -> Iterator[Flag]:
        return iter(self.flags())

    def __contains__(self, flag: object) -> bool:
        if isinstance(flag, (str, Flag)):
            return self.has(flag)
        return False

    def __getitem__(self, flag: FlagArg) -> bool:
        return self.has(flag)

    def __setitem__(self, flag, value) -> None:
        raise ImmutabilityViolation()

    def __delitem__(self, flag) -> None:
        raise ImmutabilityViolation("FlagSetView is immutable. Use remove() method instead.")

    def __setattr__(self, name, value) -> None:
        raise ImmutabilityViolation()

    def __delattr__(self, name) -> None:
        raise ImmutabilityViolation()

    # Copying and pickling rebuild through __init__; slot state is never set

    def __reduce__(self):
        return (FlagSetView, (self._raw, self._flagset))

    def __copy__(self) -> FlagSetView:
        return self

    def __deepcopy__(self, memo) -> FlagSetView:
        return self

    # Comparison and formatting

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlagSetView):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __str__(self) -> str:
        return ", ".join(self._active)

    def __repr__(self) -> str:
        return (
            f"FlagSetView(value={self._value}, binary={bin(self._value)}, "
            f"flags={self.names()!r})"
        )
