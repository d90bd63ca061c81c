"""
Example 02: Result Set Mapping

This example runs two queries, names the resulting tables, and maps them to an
order with its line items. The first table is the primary one; the second is
matched to the collection attribute by table name.
"""

import sqlite3
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Annotated

from row_mapper import ChildTable, Column, ResultSet, ResultSetMapper, Table


@dataclass
class OrderLineItem:
    id: Annotated[int, Column("OrderLineItemID")] = 0
    part_number: Annotated[str, Column("PartNumber")] = ""
    unit_price: Annotated[Decimal, Column("UnitPrice")] = Decimal("0")


@dataclass
class Order:
    id: Annotated[int, Column("OrderID")] = 0
    order_number: Annotated[str, Column("OrderNumber")] = ""
    line_items: Annotated[list[OrderLineItem], ChildTable("OrderLineItems")] = field(
        default_factory=list
    )


def fetch_table(conn, name, sql, params=()):
    cursor = conn.execute(sql, params)
    columns = [desc[0] for desc in cursor.description]
    return Table.from_records(name, columns, cursor.fetchall())


def main():
    conn = sqlite3.connect(":memory:")
    conn.executescript("""
        CREATE TABLE Orders (OrderID INTEGER PRIMARY KEY, OrderNumber TEXT);
        CREATE TABLE OrderLineItems (
            OrderLineItemID INTEGER PRIMARY KEY,
            OrderId INTEGER,
            PartNumber TEXT,
            UnitPrice REAL
        );
        INSERT INTO Orders VALUES (1, '100');
        INSERT INTO OrderLineItems VALUES (10, 1, 'P-100', 2.5);
        INSERT INTO OrderLineItems VALUES (11, 1, 'P-200', 10.0);
    """)

    mapper = ResultSetMapper(Order)

    print("=== Result Set Mapping ===\n")

    print("1. Order With Line Items:")
    result_set = ResultSet.of(
        fetch_table(conn, "Orders", "SELECT * FROM Orders WHERE OrderID = ?", (1,)),
        fetch_table(conn, "OrderLineItems", "SELECT * FROM OrderLineItems WHERE OrderId = ?", (1,)),
    )
    order = mapper.map_result_set(result_set)
    print(f"   Order #{order.order_number}")
    for item in order.line_items:
        print(f"   - {item.part_number}: {item.unit_price}")
    print()

    print("2. Child Table Not Queried:")
    result_set = ResultSet.of(
        fetch_table(conn, "Orders", "SELECT * FROM Orders WHERE OrderID = ?", (1,)),
    )
    order = mapper.map_result_set(result_set)
    print(f"   line_items = {order.line_items}")
    print()

    print("3. Child Table Queried, No Rows:")
    result_set = ResultSet.of(
        fetch_table(conn, "Orders", "SELECT * FROM Orders WHERE OrderID = ?", (1,)),
        fetch_table(
            conn, "OrderLineItems", "SELECT * FROM OrderLineItems WHERE OrderId = ?", (-1,)
        ),
    )
    order = mapper.map_result_set(result_set)
    print(f"   line_items = {order.line_items}")

    conn.close()


if __name__ == "__main__":
    main()
