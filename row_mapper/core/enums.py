"""Mapping enumerations."""

from __future__ import annotations

from enum import Enum


class NameMatching(Enum):
    """How resolved column and table names are matched against the data."""

    EXACT = "exact"
    CASE_INSENSITIVE = "case_insensitive"


class FieldKind(Enum):
    """Role of a target attribute in mapping."""

    SCALAR = "scalar"
    COLLECTION = "collection"
    EXCLUDED = "excluded"
