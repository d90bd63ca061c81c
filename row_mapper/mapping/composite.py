"""Result-set composer.

Maps the primary (first) table of a result set to one instance, then fills
each collection attribute from the child table with its resolved name.
Only one level of nesting is supported: child instances are populated from
their own rows only.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Generic, TypeVar

from row_mapper.core.coercion import Coercer
from row_mapper.core.config import MapperConfig
from row_mapper.core.exceptions import TypeConversionError
from row_mapper.core.tabular import ResultSet, Table
from row_mapper.mapping.model import RowMapper, assign
from row_mapper.mapping.registry import MapperRegistry
from row_mapper.mapping.resolver import MetadataResolver

T = TypeVar("T")


class ResultSetMapper(Generic[T]):
    """Maps a multi-table result set to one ``target_class`` instance.

    Args:
        target_class: The parent type, populated from the primary table.
        config: Name matching and parsing options (also used for table names).
        resolver: Metadata cache to use.
        coercer: Value coercer.
        registry: Element-type mapper registry; a private one is created
            when omitted.
    """

    def __init__(
        self,
        target_class: type[T],
        *,
        config: MapperConfig | None = None,
        resolver: MetadataResolver | None = None,
        coercer: Coercer | None = None,
        registry: MapperRegistry | None = None,
    ) -> None:
        self._row_mapper = RowMapper(
            target_class, config=config, resolver=resolver, coercer=coercer
        )
        if registry is None:
            registry = MapperRegistry(config=config, resolver=resolver, coercer=coercer)
        self._registry = registry

    @property
    def target_class(self) -> type[T]:
        return self._row_mapper.target_class

    def map_result_set(self, result_set: ResultSet | Sequence[Table] | None) -> T | None:
        """Map a result set.

        Returns None for an absent or empty result set, and for a primary
        table with no rows. A missing child table leaves the collection
        attribute at its constructor default; a present but empty one sets
        it to None.

        Raises:
            AmbiguousRowError: If the primary table has more than one row.
            MissingColumnError: A resolved column is absent from a row.
            TypeConversionError: A value cannot be coerced.
        """
        if result_set is None:
            return None
        if not isinstance(result_set, ResultSet):
            result_set = ResultSet(tables=tuple(result_set))
        if len(result_set) == 0:
            return None

        result = self._row_mapper.map_table(result_set.primary)
        if result is None:
            return None

        metadata = self._row_mapper.metadata
        case_sensitive = self._row_mapper.config.case_sensitive
        for collection in metadata.collection_fields:
            child_table = result_set.get(collection.table_name, case_sensitive)
            if child_table is None:
                continue

            items = self._registry.get(collection.element_type).map_many(child_table)
            if items is None or collection.container is list:
                value = items
            else:
                value = tuple(items)
            try:
                assign(result, collection.attribute_name, value, metadata.frozen)
            except (TypeError, ValueError) as e:
                raise TypeConversionError(
                    self.target_class.__name__,
                    collection.attribute_name,
                    type(value).__name__,
                    f"{collection.container.__name__}[{collection.element_type.__name__}]",
                    value,
                    detail=str(e),
                ) from e

        return result
