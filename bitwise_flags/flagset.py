"""
FlagSet: the validated, immutable universe of named bits for one bitmask.

A FlagSet is an ordered name -> value mapping built once and then only
read. Every name is a non-empty string and every value a positive power
of two; construction fails on the first violation.

Usage:
    perms = FlagSet.auto(['read', 'write', 'delete', 'admin'])
    perms['write']                  # 2
    perms.mask                      # 15
    perms.resolve(['read', 'write'])  # 3

    view = perms.view(7)
    view.names()                    # ['read', 'write', 'delete']

Two flags may share a value. That is allowed, but such names can no
longer be told apart by membership tests.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .exceptions import InvalidFlagDefinition, InvalidFlagType, UnknownFlag
from .flags import Flag, is_power_of_two
from .parser import (
    generate_flags,
    generate_from_assoc,
    is_shorthand,
    parse_flag_string,
    parse_shorthand,
)
from .view import FlagSetView


def validate_flags(flags: Mapping) -> None:
    """
    Check every (name, value) pair of a definition.

    Raises:
        InvalidFlagDefinition: On the first empty or non-string name,
            non-integer or non-positive value, or value that is not a
            power of two.
    """
    for name, value in flags.items():
        if not isinstance(name, str) or not name:
            raise InvalidFlagDefinition("Flag name must be a non-empty string.", name=name, value=value)

        # bool is an int subclass but never a valid bit
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidFlagDefinition(f"Flag value must be a positive integer: {value}", name=name, value=value)

        if not is_power_of_two(value):
            raise InvalidFlagDefinition(f"Flag value must be a power of 2: {value}", name=name, value=value)


class FlagSet(Mapping):
    """
    Immutable ordered mapping of flag name to power-of-two value.

    Construction sources:
        FlagSet({'read': 1, 'write': 2})        - explicit values
        FlagSet.auto(['read', 'write'])         - 1, 2, 4, ... in order
        FlagSet.parse('read=1,write=2')         - text definition
        FlagSet.from_assoc({'a': None, 'b': 8}) - mixed explicit / auto
        FlagSet.from_shorthand('bitwise:a,b')   - shorthand, auto values
    """

    __slots__ = ('_flags', '_mask')

    def __init__(self, flags: Optional[Mapping[str, int]] = None):
        if flags is not None and not isinstance(flags, Mapping):
            raise InvalidFlagDefinition(
                f"Flag definition must be a mapping of name to value, got {flags!r}. "
                "Use FlagSet.auto() for a list of names.",
                value=flags,
            )
        flags = dict(flags or {})
        validate_flags(flags)

        self._flags: Dict[str, int] = flags
        mask = 0
        for value in flags.values():
            mask |= value
        self._mask = mask

    # Construction paths

    @classmethod
    def auto(cls, names: Iterable[str]) -> FlagSet:
        """Build a flag set assigning 1, 2, 4, ... to names in order."""
        return cls(generate_flags(names))

    @classmethod
    def parse(cls, flag_string: str) -> FlagSet:
        """Build a flag set from a 'name=value,name=value' string."""
        return cls(parse_flag_string(flag_string))

    @classmethod
    def from_assoc(cls, flags_with_values: Mapping[str, Any]) -> FlagSet:
        """
        Build a flag set from a mapping where None or True means auto-assign.

        See parser.generate_from_assoc for the assignment rules and the
        collision caveat for explicit values that come late.
        """
        return cls(generate_from_assoc(flags_with_values))

    @classmethod
    def from_shorthand(cls, definition: str) -> FlagSet:
        """Build a flag set from a 'bitwise:read,write,delete' string."""
        names = parse_shorthand(definition)
        if names is None:
            raise InvalidFlagDefinition(
                f"Not a shorthand flag definition: {definition}", value=definition
            )
        return cls.auto(names)

    @classmethod
    def from_definition(cls, definition: Any) -> FlagSet:
        """
        Build a flag set from any supported definition.

        Accepts an existing FlagSet, a name -> value mapping, a shorthand
        or 'name=value' string, or an ordered sequence of names.
        """
        if isinstance(definition, FlagSet):
            return definition
        if isinstance(definition, Mapping):
            return cls(definition)
        if is_shorthand(definition):
            return cls.from_shorthand(definition)
        if isinstance(definition, str):
            return cls.parse(definition)
        if isinstance(definition, Iterable):
            return cls.auto(definition)
        raise InvalidFlagType(definition, f"Unsupported flag definition: {definition!r}")

    # Mapping protocol

    def __getitem__(self, name: str) -> int:
        try:
            return self._flags[name]
        except (KeyError, TypeError):
            raise UnknownFlag(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._flags)

    def __len__(self) -> int:
        return len(self._flags)

    def __contains__(self, name: object) -> bool:
        try:
            return name in self._flags
        except TypeError:
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlagSet):
            return NotImplemented
        return list(self._flags.items()) == list(other._flags.items())

    def __hash__(self) -> int:
        return hash(tuple(self._flags.items()))

    def __reduce__(self):
        return (FlagSet, (dict(self._flags),))

    def __repr__(self) -> str:
        return f"FlagSet({self._flags!r})"

    # Accessors

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._flags)

    @property
    def mask(self) -> int:
        """OR of every value in the set."""
        return self._mask

    def flag(self, name: str) -> Flag:
        return Flag(name, self[name])

    def flags(self) -> List[Flag]:
        return [Flag(name, value) for name, value in self._flags.items()]

    def to_dict(self) -> Dict[str, int]:
        return dict(self._flags)

    def view(self, raw: Optional[int] = 0) -> FlagSetView:
        """Interpret a raw integer against this flag set. None reads as 0."""
        return FlagSetView(raw or 0, self)

    def resolve(self, flags: Any) -> int:
        """
        Resolve any flag argument to its integer bitmask.

        Accepted forms:
            None                  -> 0
            int                   -> itself
            'name'                -> the named value
            Flag                  -> its value
            FlagSetView           -> its value
            iterable of names / Flags -> OR of their values

        Raises:
            UnknownFlag: If a name is not in this set.
            InvalidFlagType: If an argument or element has an unsupported type.
        """
        if flags is None:
            return 0
        if isinstance(flags, bool):
            raise InvalidFlagType(flags)
        if isinstance(flags, int):
            return flags
        if isinstance(flags, FlagSetView):
            return flags.value
        if isinstance(flags, Flag):
            return flags.value
        if isinstance(flags, str):
            return self[flags]
        if isinstance(flags, Iterable):
            result = 0
            for flag in flags:
                if isinstance(flag, Flag):
                    result |= flag.value
                elif isinstance(flag, str):
                    result |= self[flag]
                else:
                    raise InvalidFlagType(flag)
            return result
        raise InvalidFlagType(flags)
