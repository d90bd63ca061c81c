"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from row_mapper.core.tabular import ResultSet, Table
from row_mapper.mapping.resolver import MetadataResolver


@pytest.fixture
def resolver() -> MetadataResolver:
    """Isolated metadata resolver (keeps tests off the shared cache)."""
    return MetadataResolver()


@pytest.fixture
def order_row() -> dict[str, Any]:
    return {"OrderID": 1, "OrderNumber": "100", "OrderType": "B"}


@pytest.fixture
def orders_table(order_row: dict[str, Any]) -> Table:
    return Table("Orders", rows=(order_row,))


@pytest.fixture
def line_items_table() -> Table:
    return Table.from_records(
        "OrderLineItems",
        ["OrderLineItemID", "OrderId", "PartNumber", "PartDescription"],
        [
            (11, 1, "P-200", "Widget"),
            (10, 1, "P-100", "Gadget"),
        ],
    )


@pytest.fixture
def order_result_set(orders_table: Table, line_items_table: Table) -> ResultSet:
    """Primary Orders table plus its OrderLineItems child table."""
    return ResultSet.of(orders_table, line_items_table)
