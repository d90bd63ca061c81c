"""Unit tests for the functional entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any

import pytest

import row_mapper
from row_mapper import (
    AmbiguousRowError,
    ChildTable,
    Column,
    MapperConfig,
    NameMatching,
    ResultSet,
    Table,
    get_collection_fields,
    get_field_names,
    get_scalar_fields,
    map_result_set,
    map_row,
    map_rows,
    map_table,
)


@dataclass
class LineItem:
    id: Annotated[int, Column("OrderLineItemID")] = 0


@dataclass
class Order:
    id: Annotated[int, Column("OrderID")] = 0
    order_number: Annotated[str, Column("OrderNumber")] = ""
    line_items: Annotated[list[LineItem], ChildTable("OrderLineItems")] = field(
        default_factory=list
    )


class TestFunctions:
    def test_map_row(self) -> None:
        result = map_row(Order, {"OrderID": 1, "OrderNumber": "100"})
        assert result is not None
        assert result.id == 1
        assert map_row(Order, None) is None

    def test_map_rows(self) -> None:
        rows = [{"OrderLineItemID": 2}, {"OrderLineItemID": 1}]
        results = map_rows(LineItem, Table("OrderLineItems", rows=rows))
        assert results is not None
        assert [item.id for item in results] == [2, 1]
        assert map_rows(LineItem, Table("OrderLineItems")) is None

    def test_map_table(self) -> None:
        row = {"OrderID": 1, "OrderNumber": "100"}
        assert map_table(Order, Table("Orders", rows=(row,))) is not None
        with pytest.raises(AmbiguousRowError):
            map_table(Order, Table("Orders", rows=(row, row)))

    def test_map_result_set(self, order_row: dict[str, Any]) -> None:
        result_set = ResultSet.of(
            Table("Orders", rows=(order_row,)),
            Table("OrderLineItems", rows=({"OrderLineItemID": 1}, {"OrderLineItemID": 2})),
        )
        result = map_result_set(Order, result_set)
        assert result is not None
        assert [item.id for item in result.line_items] == [1, 2]
        assert map_result_set(Order, ResultSet()) is None

    def test_config_is_forwarded(self) -> None:
        config = MapperConfig(name_matching=NameMatching.CASE_INSENSITIVE)
        result_set = ResultSet.of(
            Table("orders", rows=({"orderid": 5, "ordernumber": "9"},)),
            Table("orderlineitems", rows=({"orderlineitemid": 1},)),
        )
        result = map_result_set(Order, result_set, config=config)
        assert result is not None
        assert result.id == 5
        assert len(result.line_items) == 1

    def test_field_inspection(self) -> None:
        assert get_field_names(Order) == ["OrderID", "OrderNumber"]
        assert [f.attribute_name for f in get_scalar_fields(Order)] == ["id", "order_number"]
        assert [f.table_name for f in get_collection_fields(Order)] == ["OrderLineItems"]

    def test_public_exports(self) -> None:
        for name in row_mapper.__all__:
            assert hasattr(row_mapper, name)
