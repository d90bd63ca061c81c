"""Type metadata resolution.

Derives, once per target type, which attributes are populated from which
columns and which collection attributes are populated from which child
tables. Convention first (attribute name), then ``Column`` / ``ChildTable``
overrides; ``NotMapped`` and ``ClassVar`` attributes are skipped.

Supports dataclasses, Pydantic models, and plain annotated classes.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import inspect
import threading
import types
import typing
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin

import structlog

from row_mapper.core.coercion import SCALAR_TYPES, IntRange, SingleChar
from row_mapper.core.exceptions import MetadataError
from row_mapper.mapping.annotations import ChildTable, Column, is_not_mapped
from row_mapper.mapping.plan import CollectionField, ScalarField, TypeMetadata

logger = structlog.get_logger(__name__)

# Ordered collection origins -> container used when assigning mapped children.
_SEQUENCE_ORIGINS: dict[Any, type] = {
    list: list,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    tuple: tuple,
}


def _is_pydantic_model(cls: type) -> bool:
    return hasattr(cls, "model_fields") and hasattr(cls, "model_config")


def get_field_names(cls: type) -> list[str]:
    """Enumerate a class's mappable attribute names in declaration order.

    Pydantic models use ``model_fields``, dataclasses use their fields, and
    plain classes use their public annotations (base classes first), falling
    back to the public attributes set by a zero-argument constructor.
    """
    if _is_pydantic_model(cls):
        return list(cls.model_fields.keys())  # type: ignore[attr-defined]

    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]

    names = [name for name in _type_hints(cls) if not name.startswith("_")]
    if names:
        return names
    try:
        return [name for name in vars(cls()) if not name.startswith("_")]
    except TypeError:
        return []


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise MetadataError(f"Cannot resolve type hints for {cls.__qualname__}: {e}") from e


def field_hints(cls: type) -> dict[str, tuple[Any, tuple[Any, ...]]]:
    """Map attribute name -> (type hint, extra markers)."""
    if _is_pydantic_model(cls):
        # Pydantic strips the outer Annotated into FieldInfo.metadata
        return {
            name: (info.annotation, tuple(info.metadata))
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
        }
    return {name: (hint, ()) for name, hint in _type_hints(cls).items()}


def _computed_names(cls: type) -> set[str]:
    """Read-only properties and Pydantic computed fields; never mapped."""
    names = {
        name
        for klass in cls.__mro__
        if klass is not object and not klass.__module__.startswith("pydantic")
        for name, value in vars(klass).items()
        if isinstance(value, property) and not name.startswith("_")
    }
    names.update(getattr(cls, "model_computed_fields", {}) or {})
    return names


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def unwrap_hint(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip Annotated, Optional and NewType layers.

    Returns the bare type and every Annotated marker found on the way.
    Unions of more than one non-None type resolve to Any.
    """
    markers: list[Any] = []
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            base, *extra = get_args(hint)
            markers.extend(extra)
            hint = base
            continue
        if origin is Union or origin is types.UnionType:
            args = [arg for arg in get_args(hint) if arg is not type(None)]
            if len(args) != 1:
                return Any, tuple(markers)
            hint = args[0]
            continue
        supertype = getattr(hint, "__supertype__", None)
        if supertype is not None:
            hint = supertype
            continue
        return hint, tuple(markers)


def scalar_target(base: Any) -> Any:
    """Coercion target for a bare type; parameterized generics pass values through."""
    if isinstance(base, type) and get_origin(base) is None:
        return base
    return Any


def constraint_markers(markers: tuple[Any, ...]) -> tuple[Any, ...]:
    return tuple(m for m in markers if isinstance(m, (IntRange, SingleChar)))


def _collection_info(cls: type, name: str, base: Any) -> tuple[type, type] | None:
    """Return (element type, container) if ``base`` is an ordered collection."""
    origin = get_origin(base)
    if origin is None and base in _SEQUENCE_ORIGINS:
        origin = base
    if origin not in _SEQUENCE_ORIGINS:
        return None

    args = get_args(base)
    if origin is tuple and args and not (len(args) == 2 and args[1] is Ellipsis):
        # Fixed-shape tuples are values, not child collections
        return None
    if not args:
        raise MetadataError(
            f"{cls.__qualname__}.{name}: collection attribute must declare its "
            f"element type (e.g. list[Item])"
        )

    element, _ = unwrap_hint(args[0])
    if not isinstance(element, type) or element in SCALAR_TYPES:
        raise MetadataError(
            f"{cls.__qualname__}.{name}: collection element type {element!r} "
            f"is not a mappable class"
        )
    return element, _SEQUENCE_ORIGINS[origin]


def inspect_attribute(
    cls: type,
    name: str,
    hint: Any,
    extra_markers: tuple[Any, ...] = (),
) -> ScalarField | CollectionField | None:
    """Classify one attribute. Returns None when it is excluded from mapping.

    Raises:
        MetadataError: On a misplaced override marker or an unusable
            collection declaration.
    """
    if _is_class_var(hint):
        return None

    base, markers = unwrap_hint(hint)
    markers = markers + extra_markers
    if any(is_not_mapped(m) for m in markers):
        return None

    column = next((m for m in markers if isinstance(m, Column)), None)
    table = next((m for m in markers if isinstance(m, ChildTable)), None)

    info = _collection_info(cls, name, base)
    if info is not None:
        if column is not None:
            raise MetadataError(
                f"{cls.__qualname__}.{name}: Column override on a collection attribute; "
                f"use ChildTable"
            )
        element, container = info
        return CollectionField(
            attribute_name=name,
            table_name=table.name if table is not None else name,
            element_type=element,
            container=container,
        )

    if table is not None:
        raise MetadataError(
            f"{cls.__qualname__}.{name}: ChildTable override on a scalar attribute; use Column"
        )

    return ScalarField(
        attribute_name=name,
        column_name=column.name if column is not None else name,
        target_type=scalar_target(base),
        constraints=constraint_markers(markers),
    )


def is_frozen(cls: type) -> bool:
    """Whether instances reject ordinary attribute assignment."""
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    if _is_pydantic_model(cls):
        return bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]
    return False


def check_constructible(cls: type) -> None:
    try:
        sig = inspect.signature(cls)
    except (ValueError, TypeError):
        return
    required = [
        name
        for name, param in sig.parameters.items()
        if param.default is inspect.Parameter.empty
        and param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if required:
        raise MetadataError(
            f"{cls.__qualname__} must be constructible without arguments; "
            f"parameters without defaults: {required}"
        )


def build_metadata(cls: type) -> TypeMetadata:
    """Resolve metadata for ``cls`` by introspection (uncached).

    Excluded and collection attributes are skipped individually; scanning
    always continues with the attributes declared after them.
    """
    if not isinstance(cls, type):
        raise MetadataError(f"Mapping target must be a class, got {cls!r}")
    check_constructible(cls)

    hints = field_hints(cls)
    scalar_fields: list[ScalarField] = []
    collection_fields: list[CollectionField] = []
    excluded = _computed_names(cls)

    for name in get_field_names(cls):
        hint, extra = hints.get(name, (Any, ()))
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


class MetadataResolver:
    """Thread-safe, compute-once cache of TypeMetadata keyed by type.

    Metadata is either resolved by introspection on first use or installed
    explicitly with ``register``.
    """

    def __init__(self) -> None:
        self._cache: dict[type, TypeMetadata] = {}
        self._lock = threading.Lock()

    def resolve(self, cls: type) -> TypeMetadata:
        """Return the metadata for ``cls``, resolving it on first use.

        Raises:
            MetadataError: If the type cannot be mapped.
        """
        metadata = self._cache.get(cls)
        if metadata is not None:
            return metadata

        with self._lock:
            metadata = self._cache.get(cls)
            if metadata is None:
                metadata = build_metadata(cls)
                self._cache[cls] = metadata
                logger.debug(
                    "metadata_resolved",
                    target=cls.__qualname__,
                    scalar_fields=len(metadata.scalar_fields),
                    collection_fields=len(metadata.collection_fields),
                    excluded=sorted(metadata.excluded),
                )
        return metadata

    def register(self, metadata: TypeMetadata) -> None:
        """Install explicit metadata, replacing any resolved entry."""
        with self._lock:
            self._cache[metadata.target_class] = metadata
        logger.debug(
            "metadata_registered",
            target=metadata.target_class.__qualname__,
            columns=metadata.column_names,
            tables=metadata.table_names,
        )

    def has(self, cls: type) -> bool:
        return cls in self._cache

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


default_resolver = MetadataResolver()


def resolve(cls: type) -> TypeMetadata:
    """Resolve metadata through the shared default resolver."""
    return default_resolver.resolve(cls)


def register(metadata: TypeMetadata) -> None:
    """Register explicit metadata with the shared default resolver."""
    default_resolver.register(metadata)
