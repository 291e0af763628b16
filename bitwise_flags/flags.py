"""
Single named bits and the bit arithmetic shared by the rest of the library.

A Flag pairs a name with a power-of-two integer:
- is_set_in: test whether the bit is fully present in a raw value
- set_bit / unset_bit / toggle_bit: OR / AND-NOT / XOR against a raw value
- combine: OR this flag with any number of others

Flags do not validate themselves. A Flag built directly with a value that
is not a power of two has undefined query semantics; use FlagSet to build
validated flags, or call is_power_of_two() on values from outside.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Final, Union


# Prefix of the compact 'bitwise:read,write,delete' definition string
SHORTHAND_PREFIX: Final[str] = "bitwise:"


def is_power_of_two(value: int) -> bool:
    """Return True if value is positive with exactly one bit set."""
    return value > 0 and (value & (value - 1)) == 0


def next_power_of_two(value: int) -> int:
    """
    Smallest power of two greater than or equal to value.

    Zero and negative input map to 1.
    """
    if value <= 1:
        return 1
    return 1 << (value - 1).bit_length()


@dataclass(frozen=True)
class Flag:
    """
    A single named bit.

    Two flags are equal when both name and value match.
    """
    name: str
    value: int

    def is_(self, other: Union[Flag, str]) -> bool:
        """
        Check whether this flag is the given flag or flag name.

        A string is compared against the name only; a Flag must match
        on both name and value.
        """
        if isinstance(other, Flag):
            return self.name == other.name and self.value == other.value
        return self.name == other

    def has_value(self, value: int) -> bool:
        return self.value == value

    def is_power_of_two(self) -> bool:
        return is_power_of_two(self.value)

    def combine(self, *others: Flag) -> int:
        """OR this flag's value with the values of all other flags."""
        result = self.value
        for flag in others:
            result |= flag.value
        return result

    def is_set_in(self, raw: int) -> bool:
        return (raw & self.value) == self.value

    def set_bit(self, raw: int) -> int:
        return raw | self.value

    def unset_bit(self, raw: int) -> int:
        return raw & ~self.value

    def toggle_bit(self, raw: int) -> int:
        return raw ^ self.value

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'value': self.value}

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Flag(name={self.name!r}, value={self.value}, binary={bin(self.value)})"
