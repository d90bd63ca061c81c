"""Element-type mapper registry.

The result-set composer only learns a collection's element type at run
time. The registry turns that type into a ready ``TableMapper``, creating
one CollectionMapper per distinct element type on first use.
"""

from __future__ import annotations

import threading

import structlog

from row_mapper.core.coercion import Coercer
from row_mapper.core.config import MapperConfig
from row_mapper.mapping.collection import CollectionMapper
from row_mapper.mapping.protocol import TableMapper
from row_mapper.mapping.resolver import MetadataResolver

logger = structlog.get_logger(__name__)


class MapperRegistry:
    """Thread-safe lookup of type-erased table mappers by element type.

    Args:
        config: Options passed to every mapper the registry creates.
        resolver: Metadata cache shared by created mappers.
        coercer: Value coercer shared by created mappers.
    """

    def __init__(
        self,
        *,
        config: MapperConfig | None = None,
        resolver: MetadataResolver | None = None,
        coercer: Coercer | None = None,
    ) -> None:
        self._config = config
        self._resolver = resolver
        self._coercer = coercer
        self._mappers: dict[type, TableMapper] = {}
        self._lock = threading.Lock()

    def get(self, element_type: type) -> TableMapper:
        """Return the mapper for ``element_type``, creating it on first use.

        Raises:
            MetadataError: If ``element_type`` cannot be mapped.
        """
        mapper = self._mappers.get(element_type)
        if mapper is not None:
            return mapper

        with self._lock:
            mapper = self._mappers.get(element_type)
            if mapper is None:
                mapper = CollectionMapper(
                    element_type,
                    config=self._config,
                    resolver=self._resolver,
                    coercer=self._coercer,
                )
                self._mappers[element_type] = mapper
                logger.debug("collection_mapper_created", element_type=element_type.__qualname__)
        return mapper

    def register(self, element_type: type, mapper: TableMapper) -> None:
        """Install a custom mapper for ``element_type``."""
        with self._lock:
            self._mappers[element_type] = mapper
        logger.debug(
            "mapper_registered",
            element_type=element_type.__qualname__,
            mapper=type(mapper).__qualname__,
        )

    def has(self, element_type: type) -> bool:
        return element_type in self._mappers

    def __len__(self) -> int:
        return len(self._mappers)
