"""
Column registry: which stored columns hold bitmasks, and how to read them.

A host application registers its bitmask columns once, using any of the
definition styles BitwiseCast understands, then addresses flags by column
name:

    columns = ColumnRegistry()
    columns['permissions'] = BitwiseCast.auto(['read', 'write', 'delete', 'admin'])
    columns['roles'] = 'bitwise:user,moderator,admin'
    columns['features'] = FeaturesCast          # BitwiseCast subclass

    columns.read('roles', 5).names()            # ['user', 'admin']
    columns.write('permissions', ['read'])      # 1
    columns.where('permissions', Operator.HAS, 'admin')

Columns whose definition is not bitwise raise NotBitwiseColumn when used.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from .cast import BitwiseCast
from .exceptions import NotBitwiseColumn
from .predicates import AND, MembershipPredicate, Operator, Predicate, PredicateTranslator
from .view import FlagSetView

logger = logging.getLogger(__name__)


class ColumnRegistry(dict):
    """
    A mapping of column name to bitmask definition.

    Values may be BitwiseCast instances, BitwiseCast subclasses or
    'bitwise:' shorthand strings. They are resolved to casts lazily. A
    resolved cast is cached together with the definition object it came
    from and reused only while that same object is still registered.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._casts: Dict[str, Tuple[Any, BitwiseCast]] = {}

    def register(self, column: str, definition: Any) -> None:
        """Register a column definition."""
        self[column] = definition

    def cast_for(self, column: str) -> BitwiseCast:
        """
        Get the cast for a column.

        Raises:
            NotBitwiseColumn: If the column is unknown or its definition
                is not bitwise.
        """
        definition = self.get(column)
        cached = self._casts.get(column)
        if cached is not None and column in self and cached[0] is definition:
            return cached[1]

        cast = BitwiseCast.from_definition(definition)
        if cast is None:
            self._casts.pop(column, None)
            raise NotBitwiseColumn(column)

        if isinstance(definition, str):
            logger.debug("Resolved shorthand for column %r: %s", column, definition)
        self._casts[column] = (definition, cast)
        return cast

    def is_bitwise(self, column: str) -> bool:
        return BitwiseCast.from_definition(self.get(column)) is not None

    def translator(self, column: str) -> PredicateTranslator:
        return PredicateTranslator(self.cast_for(column).flagset)

    def read(self, column: str, value: Optional[int]) -> FlagSetView:
        return self.cast_for(column).get(value)

    def write(self, column: str, value: Any) -> int:
        return self.cast_for(column).set(value)

    def where(self, column: str, operator: Operator, flags: Any, boolean: str = AND) -> Predicate:
        return self.translator(column).translate(operator, flags, boolean)

    def where_in(
        self,
        column: str,
        specifiers: Iterable[Any],
        boolean: str = AND,
        negated: bool = False,
    ) -> Optional[MembershipPredicate]:
        return self.translator(column).where_in(specifiers, boolean, negated)
