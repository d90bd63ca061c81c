"""Row-to-instance mapper.

Allocates one target instance per row through its zero-argument
constructor and populates every scalar attribute from its resolved column.
NULL cells leave the constructor default in place.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from row_mapper.core.coercion import Coercer, type_label
from row_mapper.core.config import DEFAULT_CONFIG, MapperConfig
from row_mapper.core.exceptions import (
    AmbiguousRowError,
    MissingColumnError,
    TypeConversionError,
)
from row_mapper.core.tabular import MISSING, Row, TableInput, lookup_value, rows_of
from row_mapper.mapping.plan import TypeMetadata
from row_mapper.mapping.resolver import MetadataResolver, default_resolver

T = TypeVar("T")


def assign(instance: Any, attribute: str, value: Any, frozen: bool) -> None:
    """Set an attribute, bypassing frozen dataclass/model guards."""
    if frozen:
        object.__setattr__(instance, attribute, value)
    else:
        setattr(instance, attribute, value)


class RowMapper(Generic[T]):
    """Maps rows to instances of ``target_class``.

    Args:
        target_class: Class to instantiate; must be constructible without
            arguments.
        config: Name matching and parsing options.
        resolver: Metadata cache to use. Defaults to the shared resolver.
        coercer: Value coercer. Defaults to one built from ``config``.

    Raises:
        MetadataError: If ``target_class`` cannot be mapped.
    """

    def __init__(
        self,
        target_class: type[T],
        *,
        config: MapperConfig | None = None,
        resolver: MetadataResolver | None = None,
        coercer: Coercer | None = None,
    ) -> None:
        self._target_class = target_class
        self._config = config if config is not None else DEFAULT_CONFIG
        self._resolver = resolver if resolver is not None else default_resolver
        if coercer is None:
            coercer = Coercer(parse_strings=self._config.parse_strings)
        self._coercer = coercer
        # Metadata is looked up per call; this only surfaces MetadataError early.
        self._resolver.resolve(target_class)

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    @property
    def metadata(self) -> TypeMetadata:
        return self._resolver.resolve(self._target_class)

    @property
    def config(self) -> MapperConfig:
        return self._config

    def map_one(self, row: Row | None) -> T | None:
        """Map a single row. Returns None when ``row`` is None.

        Raises:
            MissingColumnError: A resolved column is absent from the row.
            TypeConversionError: A value cannot be coerced to its attribute type.
        """
        if row is None:
            return None

        metadata = self.metadata
        case_sensitive = self._config.case_sensitive
        instance = self._target_class()

        for scalar in metadata.scalar_fields:
            raw = lookup_value(row, scalar.column_name, case_sensitive)
            if raw is MISSING:
                raise MissingColumnError(
                    self._target_class.__name__, scalar.column_name, scalar.attribute_name
                )
            if raw is None:
                continue
            try:
                value = self._coercer.coerce(raw, scalar.target_type, scalar.constraints)
                assign(instance, scalar.attribute_name, value, metadata.frozen)
            except (TypeError, ValueError, ArithmeticError) as e:
                raise TypeConversionError(
                    self._target_class.__name__,
                    scalar.attribute_name,
                    type(raw).__name__,
                    type_label(scalar.target_type, scalar.constraints),
                    raw,
                    detail=str(e),
                ) from e

        return instance

    def map_table(self, table: TableInput | None) -> T | None:
        """Map a table holding at most one row.

        Returns None for an absent or empty table.

        Raises:
            AmbiguousRowError: If the table has more than one row.
        """
        rows = rows_of(table)
        if not rows:
            return None
        if len(rows) > 1:
            raise AmbiguousRowError(self._target_class.__name__, len(rows))
        return self.map_one(rows[0])
