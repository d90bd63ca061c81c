"""row-mapper - convention-based mapping of tabular query results to typed objects."""

from __future__ import annotations

from row_mapper.api import (
    get_collection_fields,
    get_field_names,
    get_scalar_fields,
    map_result_set,
    map_row,
    map_rows,
    map_table,
)
from row_mapper.core.coercion import Coercer
from row_mapper.core.config import MapperConfig
from row_mapper.core.enums import FieldKind, NameMatching
from row_mapper.core.exceptions import (
    AmbiguousRowError,
    MappingError,
    MetadataError,
    MissingColumnError,
    RowMapperError,
    TypeConversionError,
)
from row_mapper.core.tabular import ResultSet, Row, Table
from row_mapper.mapping import (
    Char,
    ChildTable,
    CollectionMapper,
    Column,
    Int8,
    Int16,
    Int32,
    Int64,
    MapperRegistry,
    MetadataResolver,
    NotMapped,
    ResultSetMapper,
    RowMapper,
    TypeMetadata,
    UInt8,
    mapping,
    register,
    resolve,
)

__all__ = [
    # Functions
    "map_row",
    "map_rows",
    "map_table",
    "map_result_set",
    "get_field_names",
    "get_scalar_fields",
    "get_collection_fields",
    # Tabular data
    "Row",
    "Table",
    "ResultSet",
    # Markers
    "Column",
    "ChildTable",
    "NotMapped",
    "Char",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt8",
    # Metadata
    "TypeMetadata",
    "MetadataResolver",
    "resolve",
    "register",
    "mapping",
    # Mappers
    "RowMapper",
    "CollectionMapper",
    "ResultSetMapper",
    "MapperRegistry",
    "Coercer",
    # Config
    "MapperConfig",
    "NameMatching",
    "FieldKind",
    # Exceptions
    "RowMapperError",
    "MetadataError",
    "MappingError",
    "MissingColumnError",
    "TypeConversionError",
    "AmbiguousRowError",
]
