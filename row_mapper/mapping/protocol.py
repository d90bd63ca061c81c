"""Mapper protocols.

``Mapper`` is implemented by every typed mapper. ``TableMapper`` is the
type-erased view the result-set composer uses for child collections: it
only needs "map this table, give me a sequence back" for an element type
it does not know statically.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from row_mapper.core.tabular import Row, TableInput

T = TypeVar("T")


class Mapper(Protocol[T]):
    """Base mapper protocol."""

    def map_one(self, row: Row | None) -> T | None:
        """Map a single row to a target object."""
        ...


@runtime_checkable
class TableMapper(Protocol):
    """Type-erased table-to-sequence mapper."""

    @property
    def target_class(self) -> type: ...

    def map_many(self, table: TableInput | None) -> list[Any] | None:
        """Map every row of a table, or return None when there are no rows."""
        ...
