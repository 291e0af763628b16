"""
Flag definition parsing and value generation.

This module turns the compact ways of describing a flag set into plain
ordered name -> value dicts. Validation of the produced values is left
to FlagSet.

Supported inputs:
- 'read=1,write=2,delete=4'         - explicit text definition
- 'bitwise:read,write,delete'       - shorthand, auto-assigned values
- ['read', 'write', 'delete']       - ordered names, auto-assigned values
- {'read': None, 'write': 16, ...}  - mixed explicit / auto mapping

Auto-assigned values are ascending powers of two (1, 2, 4, ...) in input
order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .exceptions import InvalidFlagDefinition, InvalidFlagSyntax
from .flags import SHORTHAND_PREFIX

logger = logging.getLogger(__name__)


def generate_flags(names: Iterable[str]) -> Dict[str, int]:
    """
    Assign 1, 2, 4, ... to names in order.

    Raises:
        InvalidFlagDefinition: If a name appears more than once.
    """
    flags: Dict[str, int] = {}
    current_bit = 1

    for name in names:
        if name in flags:
            raise InvalidFlagDefinition(f"Duplicate flag name: {name}", name=name)
        flags[name] = current_bit
        current_bit <<= 1

    return flags


def _is_auto(value: Any) -> bool:
    return value is None or value is True


def generate_from_assoc(flags_with_values: Mapping[str, Any]) -> Dict[str, int]:
    """
    Build values from a mapping where None or True means "auto-assign".

    Entries are walked in order with a cursor starting at 1. An explicit
    value is kept as is and pushes the cursor to at least twice its value;
    an auto entry takes the cursor and shifts it left by one.

    Auto bits never collide with explicit values seen *earlier*. An
    explicit value appearing later may land on a bit that was already
    auto-assigned; callers that need collision-free output must order
    their explicit entries first.

    Example:
        generate_from_assoc({'read': None, 'write': 16, 'delete': None})
        # {'read': 1, 'write': 16, 'delete': 32}
    """
    flags: Dict[str, int] = {}
    next_bit = 1

    for name, value in flags_with_values.items():
        if _is_auto(value):
            flags[name] = next_bit
            logger.debug("Auto-assigned flag %r = %d", name, next_bit)
            next_bit <<= 1
        else:
            flags[name] = value
            if isinstance(value, int):
                next_bit = max(next_bit, value << 1)

    return flags


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def parse_flag_string(flag_string: str) -> Dict[str, int]:
    """
    Parse a 'name=value,name=value' definition.

    Whitespace around pairs, names and values is ignored. The values are
    returned unvalidated apart from being integers.

    Raises:
        InvalidFlagSyntax: If a pair does not contain exactly one '=' or
            its value is not an integer.
        InvalidFlagDefinition: If a name is repeated.
    """
    flags: Dict[str, int] = {}

    for pair in flag_string.split(','):
        pair = pair.strip()
        if pair.count('=') != 1:
            raise InvalidFlagSyntax(pair)

        name, raw_value = pair.split('=', 1)
        name = name.strip()
        value = _parse_int(raw_value.strip())
        if value is None:
            raise InvalidFlagSyntax(pair)

        if name in flags:
            raise InvalidFlagDefinition(f"Duplicate flag name: {name}", name=name)
        flags[name] = value

    return flags


def is_shorthand(definition: Any) -> bool:
    """Check whether a definition uses the 'bitwise:' shorthand."""
    return isinstance(definition, str) and definition.startswith(SHORTHAND_PREFIX)


def parse_shorthand(definition: str) -> Optional[List[str]]:
    """
    Parse a 'bitwise:read,write,delete' shorthand into ordered names.

    Returns None when the string does not carry the shorthand prefix, so
    callers can fall through to other definition styles.

    Raises:
        InvalidFlagSyntax: If an entry between commas is empty.
    """
    if not is_shorthand(definition):
        return None

    names = [name.strip() for name in definition[len(SHORTHAND_PREFIX):].split(',')]
    for name in names:
        if not name:
            raise InvalidFlagSyntax(
                definition,
                f"Invalid shorthand definition: {definition}. Expected 'bitwise:name,name,...'.",
            )
    return names
