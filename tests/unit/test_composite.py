"""Unit tests for ResultSetMapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any

import pytest
from structlog.testing import capture_logs

from row_mapper.core.config import MapperConfig
from row_mapper.core.enums import NameMatching
from row_mapper.core.exceptions import AmbiguousRowError
from row_mapper.core.tabular import ResultSet, Table, TableInput
from row_mapper.mapping.annotations import Char, ChildTable, Column
from row_mapper.mapping.composite import ResultSetMapper
from row_mapper.mapping.registry import MapperRegistry


@dataclass
class OrderLineItem:
    id: Annotated[int, Column("OrderLineItemID")] = 0
    order_id: Annotated[int, Column("OrderId")] = 0
    part_number: Annotated[str, Column("PartNumber")] = ""
    part_description: Annotated[str, Column("PartDescription")] = ""


@dataclass
class Order:
    id: Annotated[int, Column("OrderID")] = 0
    order_number: Annotated[str | None, Column("OrderNumber")] = None
    order_type: Annotated[Char, Column("OrderType")] = ""
    line_items: Annotated[list[OrderLineItem], ChildTable("OrderLineItems")] = field(
        default_factory=list
    )

    @property
    def is_bill_only(self) -> bool:
        return self.order_type == "B"


@dataclass
class Toy:
    name: str = ""


@dataclass
class Child:
    name: str = ""
    toys: list[Toy] = field(default_factory=list)


@dataclass
class Parent:
    name: str = ""
    children: list[Child] = field(default_factory=list)


@dataclass(frozen=True)
class Tag:
    label: str = ""


@dataclass(frozen=True)
class Article:
    title: str = ""
    tags: tuple[Tag, ...] = ()


class StubTableMapper:
    """Custom type-erased mapper used to check registry dispatch."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    @property
    def target_class(self) -> type:
        return OrderLineItem

    def map_many(self, table: TableInput | None) -> list[Any] | None:
        assert isinstance(table, Table)
        self.calls.append(table.name)
        return [OrderLineItem(id=99)]


class TestResultSetMapper:
    def test_parent_with_child_table(self, order_result_set: ResultSet) -> None:
        result = ResultSetMapper(Order).map_result_set(order_result_set)
        assert result is not None
        assert result.id == 1
        assert result.is_bill_only is True
        assert len(result.line_items) == 2
        assert [item.id for item in result.line_items] == [11, 10]
        assert all(isinstance(item, OrderLineItem) for item in result.line_items)

    def test_child_table_absent(self, orders_table: Table) -> None:
        result = ResultSetMapper(Order).map_result_set(ResultSet.of(orders_table))
        assert result is not None
        assert result.id == 1
        assert result.line_items == []

    def test_child_table_empty(self, orders_table: Table) -> None:
        result = ResultSetMapper(Order).map_result_set(
            ResultSet.of(orders_table, Table("OrderLineItems"))
        )
        assert result is not None
        assert result.line_items is None

    def test_child_table_empty_tuple_container(self) -> None:
        result_set = ResultSet.of(Table("Articles", rows=({"title": "Hello"},)), Table("tags"))
        result = ResultSetMapper(Article).map_result_set(result_set)
        assert result is not None
        assert result.tags is None

    def test_zero_tables(self) -> None:
        assert ResultSetMapper(Order).map_result_set(ResultSet()) is None

    def test_absent_result_set(self) -> None:
        assert ResultSetMapper(Order).map_result_set(None) is None

    def test_primary_table_empty(self, line_items_table: Table) -> None:
        result_set = ResultSet.of(Table("Orders"), line_items_table)
        assert ResultSetMapper(Order).map_result_set(result_set) is None

    def test_primary_table_with_many_rows(self, order_row: dict[str, Any]) -> None:
        primary = Table("Orders", rows=(order_row, order_row))
        with pytest.raises(AmbiguousRowError):
            ResultSetMapper(Order).map_result_set(ResultSet.of(primary))

    def test_accepts_table_sequence(
        self, orders_table: Table, line_items_table: Table
    ) -> None:
        result = ResultSetMapper(Order).map_result_set([orders_table, line_items_table])
        assert result is not None
        assert len(result.line_items) == 2

    def test_primary_table_name_is_not_significant(
        self, order_row: dict[str, Any], line_items_table: Table
    ) -> None:
        result_set = ResultSet.of(Table("Table0", rows=(order_row,)), line_items_table)
        result = ResultSetMapper(Order).map_result_set(result_set)
        assert result is not None
        assert len(result.line_items) == 2

    def test_unrelated_tables_ignored(self, orders_table: Table) -> None:
        extra = Table("Audit", rows=({"x": 1},))
        result = ResultSetMapper(Order).map_result_set(ResultSet.of(orders_table, extra))
        assert result is not None
        assert result.line_items == []

    def test_convention_table_name(self) -> None:
        result_set = ResultSet.of(
            Table("Parents", rows=({"name": "Ann"},)),
            Table("children", rows=({"name": "Bo"}, {"name": "Cy"})),
        )
        result = ResultSetMapper(Parent).map_result_set(result_set)
        assert result is not None
        assert [child.name for child in result.children] == ["Bo", "Cy"]

    def test_single_level_of_nesting(self) -> None:
        result_set = ResultSet.of(
            Table("Parents", rows=({"name": "Ann"},)),
            Table("children", rows=({"name": "Bo"},)),
            Table("toys", rows=({"name": "ball"},)),
        )
        result = ResultSetMapper(Parent).map_result_set(result_set)
        assert result is not None
        assert result.children[0].toys == []

    def test_tuple_collection_on_frozen_target(self) -> None:
        result_set = ResultSet.of(
            Table("Articles", rows=({"title": "Hello"},)),
            Table("tags", rows=({"label": "a"}, {"label": "b"})),
        )
        result = ResultSetMapper(Article).map_result_set(result_set)
        assert result == Article(title="Hello", tags=(Tag("a"), Tag("b")))


class TestTableNameMatching:
    def _result_set(self, order_row: dict[str, Any], line_items_table: Table) -> ResultSet:
        renamed = Table("orderlineitems", rows=line_items_table.rows)
        return ResultSet.of(Table("Orders", rows=(order_row,)), renamed)

    def test_exact_match_by_default(
        self, order_row: dict[str, Any], line_items_table: Table
    ) -> None:
        result = ResultSetMapper(Order).map_result_set(
            self._result_set(order_row, line_items_table)
        )
        assert result is not None
        assert result.line_items == []

    def test_case_insensitive(self, order_row: dict[str, Any], line_items_table: Table) -> None:
        config = MapperConfig(name_matching=NameMatching.CASE_INSENSITIVE)
        result = ResultSetMapper(Order, config=config).map_result_set(
            self._result_set(order_row, line_items_table)
        )
        assert result is not None
        assert len(result.line_items) == 2


class TestMapperRegistry:
    def test_registry_creates_mapper_once(self, order_result_set: ResultSet) -> None:
        registry = MapperRegistry()
        mapper = ResultSetMapper(Order, registry=registry)
        mapper.map_result_set(order_result_set)
        first = registry.get(OrderLineItem)
        mapper.map_result_set(order_result_set)
        assert registry.get(OrderLineItem) is first
        assert registry.has(OrderLineItem)
        assert len(registry) == 1

    def test_registered_mapper_is_used(self, order_result_set: ResultSet) -> None:
        registry = MapperRegistry()
        stub = StubTableMapper()
        registry.register(OrderLineItem, stub)
        result = ResultSetMapper(Order, registry=registry).map_result_set(order_result_set)
        assert result is not None
        assert stub.calls == ["OrderLineItems"]
        assert [item.id for item in result.line_items] == [99]

    def test_mapper_target_class(self) -> None:
        assert MapperRegistry().get(Toy).target_class is Toy

    def test_registry_events(self) -> None:
        registry = MapperRegistry()
        with capture_logs() as logs:
            registry.get(Toy)
            registry.register(OrderLineItem, StubTableMapper())
        events = [(entry["event"], entry["element_type"]) for entry in logs]
        assert events == [
            ("collection_mapper_created", "Toy"),
            ("mapper_registered", "OrderLineItem"),
        ]
        assert logs[1]["mapper"] == "StubTableMapper"
