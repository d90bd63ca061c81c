"""row-mapper exception hierarchy.

Absent input (no row, no table, no result set) is never an error; every
other mapping failure surfaces as one of these exceptions, chained to the
underlying Python error where there is one.
"""

from __future__ import annotations

from typing import Any


class RowMapperError(Exception):
    """Base exception for all row-mapper errors."""


# --- Metadata ---


class MetadataError(RowMapperError):
    """Raised when a type's mapping metadata cannot be resolved or registered."""


# --- Mapping ---


class MappingError(RowMapperError):
    """Base for row mapping errors."""


class MissingColumnError(MappingError):
    """Raised when a resolved column name is absent from a row."""

    def __init__(self, target_class: str, column_name: str, attribute_name: str) -> None:
        self.target_class = target_class
        self.column_name = column_name
        self.attribute_name = attribute_name
        super().__init__(
            f"Cannot map to {target_class}: column '{column_name}' "
            f"for attribute '{attribute_name}' is missing from the row"
        )


class TypeConversionError(MappingError):
    """Raised when a cell value cannot be coerced to its attribute's type."""

    def __init__(
        self,
        target_class: str,
        attribute_name: str,
        source_type: str,
        target_type: str,
        value: Any,
        detail: str | None = None,
    ) -> None:
        self.target_class = target_class
        self.attribute_name = attribute_name
        self.source_type = source_type
        self.target_type = target_type
        self.value = value
        message = (
            f"Cannot convert {source_type} value {value!r} to {target_type} "
            f"for {target_class}.{attribute_name}"
        )
        if detail:
            message += f": {detail}"
        super().__init__(message)


class AmbiguousRowError(MappingError):
    """Raised when more than one row is supplied where exactly one is required."""

    def __init__(self, target_class: str, row_count: int) -> None:
        self.target_class = target_class
        self.row_count = row_count
        super().__init__(
            f"Mapping a single {target_class} received {row_count} rows (expected 0 or 1)"
        )
