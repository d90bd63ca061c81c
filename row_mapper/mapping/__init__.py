"""Mapping layer - transform rows, tables and result sets into typed objects."""

from __future__ import annotations

from row_mapper.mapping.annotations import (
    Char,
    ChildTable,
    Column,
    Int8,
    Int16,
    Int32,
    Int64,
    NotMapped,
    UInt8,
)
from row_mapper.mapping.builder import TypeMappingBuilder, mapping
from row_mapper.mapping.collection import CollectionMapper
from row_mapper.mapping.composite import ResultSetMapper
from row_mapper.mapping.model import RowMapper
from row_mapper.mapping.plan import CollectionField, ScalarField, TypeMetadata
from row_mapper.mapping.protocol import Mapper, TableMapper
from row_mapper.mapping.registry import MapperRegistry
from row_mapper.mapping.resolver import MetadataResolver, default_resolver, register, resolve

__all__ = [
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
    "ScalarField",
    "CollectionField",
    "MetadataResolver",
    "default_resolver",
    "resolve",
    "register",
    "mapping",
    "TypeMappingBuilder",
    # Mappers
    "Mapper",
    "TableMapper",
    "RowMapper",
    "CollectionMapper",
    "ResultSetMapper",
    "MapperRegistry",
]
