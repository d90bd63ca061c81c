"""Mapper configuration.

MapperConfig is a Pydantic model so that it can be loaded from settings
files or environment-derived dicts with validation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from row_mapper.core.enums import NameMatching


class MapperConfig(BaseModel):
    """Configuration shared by all mappers.

    Attributes:
        name_matching: Policy for matching resolved column/table names.
            ``EXACT`` by default; ``CASE_INSENSITIVE`` compares casefolded
            names, preferring an exact match when both exist.
        parse_strings: Allow text cells to be parsed into numeric, boolean,
            temporal and UUID attributes.
    """

    model_config = ConfigDict(frozen=True)

    name_matching: NameMatching = NameMatching.EXACT
    parse_strings: bool = True

    @property
    def case_sensitive(self) -> bool:
        return self.name_matching is NameMatching.EXACT


DEFAULT_CONFIG = MapperConfig()
