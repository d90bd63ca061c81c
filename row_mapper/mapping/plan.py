"""Type metadata data classes.

Frozen dataclasses describing how a target type is populated from rows.
Built once per type by the MetadataResolver (or the mapping builder) and
shared by every mapper of that type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from row_mapper.core.enums import FieldKind


@dataclass(frozen=True)
class ScalarField:
    """A scalar attribute sourced from a single column."""

    attribute_name: str
    column_name: str
    target_type: Any = Any
    constraints: tuple[Any, ...] = ()


@dataclass(frozen=True)
class CollectionField:
    """A collection attribute sourced from a named child table."""

    attribute_name: str
    table_name: str
    element_type: type
    container: type = list  # list or tuple


@dataclass(frozen=True)
class TypeMetadata:
    """Resolved mapping metadata for one target type."""

    target_class: type
    scalar_fields: tuple[ScalarField, ...] = ()
    collection_fields: tuple[CollectionField, ...] = ()
    excluded: frozenset[str] = field(default_factory=frozenset)
    frozen: bool = False

    @property
    def column_names(self) -> list[str]:
        """Resolved source column names, in declaration order."""
        return [f.column_name for f in self.scalar_fields]

    @property
    def table_names(self) -> list[str]:
        """Resolved child table names, in declaration order."""
        return [f.table_name for f in self.collection_fields]

    def scalar(self, attribute_name: str) -> ScalarField | None:
        for f in self.scalar_fields:
            if f.attribute_name == attribute_name:
                return f
        return None

    def collection(self, attribute_name: str) -> CollectionField | None:
        for f in self.collection_fields:
            if f.attribute_name == attribute_name:
                return f
        return None

    def kind(self, attribute_name: str) -> FieldKind | None:
        """Role of an attribute, or None if the type does not know it."""
        if self.scalar(attribute_name) is not None:
            return FieldKind.SCALAR
        if self.collection(attribute_name) is not None:
            return FieldKind.COLLECTION
        if attribute_name in self.excluded:
            return FieldKind.EXCLUDED
        return None
