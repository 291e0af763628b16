"""
Translation of flag-membership conditions into query predicates.

The translator never builds query text. It resolves flag names to a bitmask
and pairs it with a comparison, which a query layer embeds in its own
filter syntax:

    HAS          -> (column & mask) == mask     MASK_EQUALS_MASK
    HAS_ANY      -> (column & mask) > 0         MASK_GT_ZERO
    DOESNT_HAVE  -> (column & mask) == 0        MASK_EQUALS_ZERO
    EQUALS       -> column == mask              VALUE_EQUALS

Usage:
    perms = FlagSet.auto(['read', 'write', 'delete', 'admin'])
    translate(perms, Operator.HAS, ['read', 'write'])
    # Predicate(mask=3, comparison=Comparison.MASK_EQUALS_MASK, boolean='and')

    where = PredicateTranslator(perms)
    where.where_in(['read', ['write', 'delete']])
    # MembershipPredicate(masks=(1, 6), negated=False, boolean='and')

Predicates can also be evaluated in memory with matches(raw).

An empty HAS_ANY request resolves to mask 0 and matches nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Final, Iterable, Optional, Tuple

from .exceptions import InvalidFlagType
from .flags import Flag
from .flagset import FlagSet


AND: Final[str] = 'and'
OR: Final[str] = 'or'


class Operator(Enum):
    """Requested flag condition."""
    HAS = auto()           # all given flags present
    HAS_ANY = auto()       # at least one given flag present
    DOESNT_HAVE = auto()   # none of the given flags present
    EQUALS = auto()        # exactly the given flags, nothing else


class Comparison(Enum):
    """How a query layer compares the stored column with the mask."""
    MASK_EQUALS_MASK = auto()   # (column & mask) == mask
    MASK_GT_ZERO = auto()       # (column & mask) > 0
    MASK_EQUALS_ZERO = auto()   # (column & mask) == 0
    VALUE_EQUALS = auto()       # column == mask


COMPARISONS: Final = {
    Operator.HAS: Comparison.MASK_EQUALS_MASK,
    Operator.HAS_ANY: Comparison.MASK_GT_ZERO,
    Operator.DOESNT_HAVE: Comparison.MASK_EQUALS_ZERO,
    Operator.EQUALS: Comparison.VALUE_EQUALS,
}


def _check_boolean(boolean: str) -> None:
    if boolean not in (AND, OR):
        raise ValueError(f"boolean must be '{AND}' or '{OR}', got {boolean!r}")


@dataclass(frozen=True)
class Predicate:
    """
    A single bitmask condition on one column.

    `boolean` tells the query layer how to join this condition with the
    ones before it ('and' / 'or').
    """
    mask: int
    comparison: Comparison
    boolean: str = AND

    def __post_init__(self):
        _check_boolean(self.boolean)

    def matches(self, raw: Optional[int]) -> bool:
        """Evaluate the condition against a stored integer. None reads as 0."""
        raw = raw or 0
        if self.comparison is Comparison.MASK_EQUALS_MASK:
            return (raw & self.mask) == self.mask
        if self.comparison is Comparison.MASK_GT_ZERO:
            return (raw & self.mask) > 0
        if self.comparison is Comparison.MASK_EQUALS_ZERO:
            return (raw & self.mask) == 0
        return raw == self.mask


@dataclass(frozen=True)
class MembershipPredicate:
    """
    An IN / NOT IN condition over several masks.

    IN holds when (column & mask) == mask for at least one mask; NOT IN
    holds when it does for none of them.
    """
    masks: Tuple[int, ...]
    negated: bool = False
    boolean: str = AND

    def __post_init__(self):
        _check_boolean(self.boolean)

    def matches(self, raw: Optional[int]) -> bool:
        raw = raw or 0
        found = any((raw & mask) == mask for mask in self.masks)
        return not found if self.negated else found


def _specifier_mask(flagset: FlagSet, specifier: Any) -> int:
    # A specifier is one flag or a group of flags that must all be present
    if not isinstance(specifier, (str, Flag, list, tuple, set, frozenset)):
        raise InvalidFlagType(specifier)
    return flagset.resolve(specifier)


def translate(flagset: FlagSet, operator: Operator, flags: Any, boolean: str = AND) -> Predicate:
    """
    Resolve flags against a flag set and pair the mask with a comparison.

    Args:
        flagset: The flag set governing the column
        operator: The requested condition
        flags: A flag name or Flag, or a list of them (OR-ed into one mask)
        boolean: How the predicate joins preceding ones ('and' / 'or')

    Raises:
        UnknownFlag: If a flag name is not in the flag set.
    """
    mask = _specifier_mask(flagset, flags)
    return Predicate(mask=mask, comparison=COMPARISONS[operator], boolean=boolean)


def translate_in(
    flagset: FlagSet,
    specifiers: Iterable[Any],
    negated: bool = False,
    boolean: str = AND,
) -> Optional[MembershipPredicate]:
    """
    Build an IN (or NOT IN) condition, one mask per specifier.

    Each specifier is a single flag, or a list of flags that must all be
    present. Returns None for an empty specifier list, meaning no
    filtering at all.
    """
    masks = tuple(_specifier_mask(flagset, specifier) for specifier in specifiers)
    if not masks:
        return None
    return MembershipPredicate(masks=masks, negated=negated, boolean=boolean)


class PredicateTranslator:
    """Named predicate builders bound to one flag set."""

    def __init__(self, flagset: FlagSet):
        self.flagset = flagset

    def translate(self, operator: Operator, flags: Any, boolean: str = AND) -> Predicate:
        return translate(self.flagset, operator, flags, boolean)

    def where(self, flags: Any, boolean: str = AND) -> Predicate:
        """Alias of where_has()."""
        return self.translate(Operator.HAS, flags, boolean)

    def where_has(self, flags: Any, boolean: str = AND) -> Predicate:
        return self.translate(Operator.HAS, flags, boolean)

    def where_has_any(self, flags: Any, boolean: str = AND) -> Predicate:
        return self.translate(Operator.HAS_ANY, flags, boolean)

    def where_doesnt_have(self, flags: Any, boolean: str = AND) -> Predicate:
        return self.translate(Operator.DOESNT_HAVE, flags, boolean)

    def where_equals(self, flags: Any, boolean: str = AND) -> Predicate:
        return self.translate(Operator.EQUALS, flags, boolean)

    def or_where(self, flags: Any) -> Predicate:
        return self.where(flags, OR)

    def or_where_has(self, flags: Any) -> Predicate:
        return self.where_has(flags, OR)

    def or_where_has_any(self, flags: Any) -> Predicate:
        return self.where_has_any(flags, OR)

    def or_where_doesnt_have(self, flags: Any) -> Predicate:
        return self.where_doesnt_have(flags, OR)

    def or_where_equals(self, flags: Any) -> Predicate:
        return self.where_equals(flags, OR)

    def where_in(self, specifiers: Iterable[Any], boolean: str = AND, negated: bool = False) -> Optional[MembershipPredicate]:
        return translate_in(self.flagset, specifiers, negated, boolean)

    def where_not_in(self, specifiers: Iterable[Any], boolean: str = AND) -> Optional[MembershipPredicate]:
        return translate_in(self.flagset, specifiers, True, boolean)

    def or_where_in(self, specifiers: Iterable[Any]) -> Optional[MembershipPredicate]:
        return translate_in(self.flagset, specifiers, False, OR)

    def or_where_not_in(self, specifiers: Iterable[Any]) -> Optional[MembershipPredicate]:
        return translate_in(self.flagset, specifiers, True, OR)
