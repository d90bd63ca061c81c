"""Rows-to-list mapper."""

from __future__ import annotations

from typing import Generic, TypeVar

from row_mapper.core.coercion import Coercer
from row_mapper.core.config import MapperConfig
from row_mapper.core.tabular import Row, TableInput, rows_of
from row_mapper.mapping.model import RowMapper
from row_mapper.mapping.resolver import MetadataResolver

T = TypeVar("T")


class CollectionMapper(Generic[T]):
    """Maps every row of a table to an instance of ``target_class``.

    An absent table and a table with zero rows both yield None rather than
    an empty list, so callers can tell "nothing supplied" apart from a
    mapped result. A failing row fails the whole call.
    """

    def __init__(
        self,
        target_class: type[T],
        *,
        config: MapperConfig | None = None,
        resolver: MetadataResolver | None = None,
        coercer: Coercer | None = None,
        row_mapper: RowMapper[T] | None = None,
    ) -> None:
        if row_mapper is None:
            row_mapper = RowMapper(target_class, config=config, resolver=resolver, coercer=coercer)
        self._row_mapper = row_mapper

    @property
    def target_class(self) -> type[T]:
        return self._row_mapper.target_class

    def map_one(self, row: Row | None) -> T | None:
        return self._row_mapper.map_one(row)

    def map_many(self, table: TableInput | None) -> list[T] | None:
        """Map all rows in order. Returns None when there are no rows."""
        rows = rows_of(table)
        if not rows:
            return None
        map_one = self._row_mapper.map_one
        return [map_one(row) for row in rows]  # type: ignore[misc]
