"""Explicit mapping DSL.

Builds TypeMetadata by declaration instead of annotation markers, for
types whose column/table names cannot be expressed on the class itself
(third-party classes, generated models). Register the result so that every
mapper uses it in place of introspection.

Example::

    metadata = (
        mapping(Order)
        .auto_fields()
        .column("id", "OrderID")
        .collection("line_items", OrderLineItem, table="OrderLineItems")
        .exclude("is_bill_only")
        .build()
    )
    register(metadata)
"""

from __future__ import annotations

from typing import Any, get_origin

from row_mapper.core.exceptions import MetadataError
from row_mapper.mapping.plan import CollectionField, ScalarField, TypeMetadata
from row_mapper.mapping.resolver import (
    check_constructible,
    constraint_markers,
    field_hints,
    get_field_names,
    inspect_attribute,
    is_frozen,
    scalar_target,
    unwrap_hint,
)


def mapping(target_class: type) -> TypeMappingBuilder:
    """Entry point for the mapping DSL.

    Args:
        target_class: The class to describe.

    Returns:
        A builder for chaining mapping declarations.
    """
    return TypeMappingBuilder(target_class)


class TypeMappingBuilder:
    """Fluent builder for explicit type metadata.

    Declared attributes ignore annotation markers. With ``auto_fields()``
    every undeclared attribute is resolved by convention, markers included;
    without it undeclared attributes are excluded.
    """

    def __init__(self, target_class: type) -> None:
        self._target_class = target_class
        self._auto_fields_enabled = False
        self._columns: dict[str, str] = {}
        self._collections: dict[str, tuple[type, str]] = {}  # name -> (element, table)
        self._excluded: set[str] = set()
        self._declared: list[str] = []

    def _declare(self, attr_name: str) -> None:
        if attr_name in self._declared:
            raise MetadataError(f"Attribute '{attr_name}' is declared more than once")
        self._declared.append(attr_name)

    def auto_fields(self) -> TypeMappingBuilder:
        """Map all undeclared attributes by convention."""
        self._auto_fields_enabled = True
        return self

    def column(self, attr_name: str, column_name: str | None = None) -> TypeMappingBuilder:
        """Map a scalar attribute from a column (defaults to the attribute name)."""
        self._declare(attr_name)
        self._columns[attr_name] = column_name or attr_name
        return self

    def collection(
        self,
        attr_name: str,
        element_type: type,
        table: str | None = None,
    ) -> TypeMappingBuilder:
        """Map a collection attribute from a child table (defaults to the attribute name)."""
        self._declare(attr_name)
        self._collections[attr_name] = (element_type, table or attr_name)
        return self

    def exclude(self, attr_name: str) -> TypeMappingBuilder:
        """Exclude an attribute from mapping."""
        self._declare(attr_name)
        self._excluded.add(attr_name)
        return self

    def build(self) -> TypeMetadata:
        """Compile and validate the declarations into TypeMetadata."""
        cls = self._target_class
        if not isinstance(cls, type):
            raise MetadataError(f"Mapping target must be a class, got {cls!r}")
        check_constructible(cls)

        names = get_field_names(cls)
        unknown = [name for name in self._declared if name not in names]
        if unknown:
            raise MetadataError(f"{cls.__qualname__} has no mappable attributes {unknown}")

        hints = field_hints(cls)
        scalar_fields: list[ScalarField] = []
        collection_fields: list[CollectionField] = []
        excluded = set(self._excluded)

        for name in names:
            hint, extra = hints.get(name, (Any, ()))
            if name in self._columns:
                base, markers = unwrap_hint(hint)
                scalar_fields.append(
                    ScalarField(
                        attribute_name=name,
                        column_name=self._columns[name],
                        target_type=scalar_target(base),
                        constraints=constraint_markers(markers + extra),
                    )
                )
            elif name in self._collections:
                element_type, table = self._collections[name]
                base, _ = unwrap_hint(hint)
                is_tuple = base is tuple or get_origin(base) is tuple
                collection_fields.append(
                    CollectionField(
                        attribute_name=name,
                        table_name=table,
                        element_type=element_type,
                        container=tuple if is_tuple else list,
                    )
                )
            elif name in excluded or not self._auto_fields_enabled:
                excluded.add(name)
            else:
                resolved = inspect_attribute(cls, name, hint, extra)
                if resolved is None:
                    excluded.add(name)
                elif isinstance(resolved, CollectionField):
                    collection_fields.append(resolved)
                else:
                    scalar_fields.append(resolved)

        return TypeMetadata(
            target_class=cls,
            scalar_fields=tuple(scalar_fields),
            collection_fields=tuple(collection_fields),
            excluded=frozenset(excluded),
            frozen=is_frozen(cls),
        )
