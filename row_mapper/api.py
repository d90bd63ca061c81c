"""Functional entry points.

Thin wrappers that build a mapper per call. Metadata is still resolved
once per type through the shared resolver; hold on to a mapper instance
instead when mapping the same type repeatedly with custom options.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from row_mapper.core.config import MapperConfig
from row_mapper.core.tabular import ResultSet, Row, Table, TableInput
from row_mapper.mapping.collection import CollectionMapper
from row_mapper.mapping.composite import ResultSetMapper
from row_mapper.mapping.model import RowMapper
from row_mapper.mapping.plan import CollectionField, ScalarField
from row_mapper.mapping.registry import MapperRegistry
from row_mapper.mapping.resolver import resolve

T = TypeVar("T")

# Shared by calls that use the default configuration.
_default_registry = MapperRegistry()


def map_row(
    target_class: type[T],
    row: Row | None,
    *,
    config: MapperConfig | None = None,
) -> T | None:
    """Map one row to a new ``target_class`` instance (None for no row)."""
    return RowMapper(target_class, config=config).map_one(row)


def map_rows(
    target_class: type[T],
    table: TableInput | None,
    *,
    config: MapperConfig | None = None,
) -> list[T] | None:
    """Map every row of a table; None when the table is absent or empty."""
    return CollectionMapper(target_class, config=config).map_many(table)


def map_table(
    target_class: type[T],
    table: TableInput | None,
    *,
    config: MapperConfig | None = None,
) -> T | None:
    """Map a table holding at most one row; raises AmbiguousRowError otherwise."""
    return RowMapper(target_class, config=config).map_table(table)


def map_result_set(
    target_class: type[T],
    result_set: ResultSet | Sequence[Table] | None,
    *,
    config: MapperConfig | None = None,
) -> T | None:
    """Map a primary table plus named child tables to one instance."""
    registry = _default_registry if config is None else None
    return ResultSetMapper(target_class, config=config, registry=registry).map_result_set(
        result_set
    )


def get_field_names(target_class: type) -> list[str]:
    """Resolved source column names of ``target_class``, in declaration order."""
    return resolve(target_class).column_names


def get_scalar_fields(target_class: type) -> tuple[ScalarField, ...]:
    return resolve(target_class).scalar_fields


def get_collection_fields(target_class: type) -> tuple[CollectionField, ...]:
    return resolve(target_class).collection_fields
