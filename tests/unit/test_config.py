"""Unit tests for MapperConfig."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from row_mapper.core.config import DEFAULT_CONFIG, MapperConfig
from row_mapper.core.enums import NameMatching


class TestMapperConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.name_matching is NameMatching.EXACT
        assert DEFAULT_CONFIG.parse_strings is True
        assert DEFAULT_CONFIG.case_sensitive is True

    def test_from_dict(self) -> None:
        config = MapperConfig.model_validate(
            {"name_matching": "case_insensitive", "parse_strings": False}
        )
        assert config.name_matching is NameMatching.CASE_INSENSITIVE
        assert config.case_sensitive is False
        assert config.parse_strings is False

    def test_invalid_value(self) -> None:
        with pytest.raises(ValidationError):
            MapperConfig.model_validate({"name_matching": "fuzzy"})

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.parse_strings = False  # type: ignore[misc]
