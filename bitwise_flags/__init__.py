"""
bitwise_flags - Named boolean flags stored in a single integer.

This library provides:
- Validated flag sets (every value a positive power of two)
- Auto-assigned, textual, shorthand and mixed flag definitions
- Immutable views with set algebra over the active flags
- Read/write conversion between stored integers and views
- Query predicates (bitmask + comparison) for an external query layer

Basic Usage:
    import bitwise_flags as bf

    perms = bf.FlagSet.auto(['read', 'write', 'delete', 'admin'])

    view = perms.view(7)
    view.names()                 # ['read', 'write', 'delete']
    view.has('read', 'write')    # True
    view.add('admin').value      # 15
    view.value                   # 7, views never change

    cast = bf.BitwiseCast(perms)
    cast.set(['read', 'admin'])  # 9

    bf.translate(perms, bf.Operator.HAS, ['read', 'write'])
    # Predicate(mask=3, comparison=Comparison.MASK_EQUALS_MASK, boolean='and')

Key Concepts:
    - Flag: a single named bit
    - FlagSet: the fixed universe of named bits for one column
    - FlagSetView: the flags active in one raw value
    - BitwiseCast: stored integer <-> view conversion
    - PredicateTranslator: flag conditions as (mask, comparison) pairs
    - ColumnRegistry: column name -> flag definition
"""

from .cast import BitwiseCast
from .exceptions import (
    BitwiseError,
    ImmutabilityViolation,
    InvalidFlagDefinition,
    InvalidFlagSyntax,
    InvalidFlagType,
    NotBitwiseColumn,
    UnknownFlag,
)
from .flags import SHORTHAND_PREFIX, Flag, is_power_of_two, next_power_of_two
from .flagset import FlagSet, validate_flags
from .parser import generate_flags, generate_from_assoc, parse_flag_string, parse_shorthand
from .predicates import (
    AND,
    OR,
    Comparison,
    MembershipPredicate,
    Operator,
    Predicate,
    PredicateTranslator,
    translate,
    translate_in,
)
from .registry import ColumnRegistry
from .view import FlagSetView

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Flag",
    "FlagSet",
    "FlagSetView",
    "BitwiseCast",
    "ColumnRegistry",
    # Definitions
    "SHORTHAND_PREFIX",
    "generate_flags",
    "generate_from_assoc",
    "parse_flag_string",
    "parse_shorthand",
    "validate_flags",
    "is_power_of_two",
    "next_power_of_two",
    # Predicates
    "AND",
    "OR",
    "Operator",
    "Comparison",
    "Predicate",
    "MembershipPredicate",
    "PredicateTranslator",
    "translate",
    "translate_in",
    # Exceptions
    "BitwiseError",
    "InvalidFlagDefinition",
    "InvalidFlagSyntax",
    "InvalidFlagType",
    "UnknownFlag",
    "ImmutabilityViolation",
    "NotBitwiseColumn",
]


def auto(names) -> FlagSet:
    """Shortcut for FlagSet.auto()."""
    return FlagSet.auto(names)


def describe(view: FlagSetView) -> None:
    """
    Print a view's value and which of its flag set's flags are active.

    Handy when inspecting a stored integer by hand.
    """
    print(f"Value: {view.value} ({bin(view.value)})")
    if view.raw != view.value:
        print(f"Raw: {view.raw} (unknown bits dropped: {bin(view.raw & ~view.flagset.mask)})")
    for flag in view.flagset.flags():
        marker = "x" if view.has(flag) else " "
        print(f"  [{marker}] {flag.name} = {flag.value}")
