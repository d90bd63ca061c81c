"""
Example 01: Row Mapping

This example maps single rows and whole tables from a SQLite query to a dataclass,
using column-name overrides, a single-character field and a derived property.
"""

import sqlite3
from dataclasses import dataclass
from typing import Annotated, Optional

from row_mapper import Char, Column, Table, map_rows, map_table


@dataclass
class Order:
    """Order header"""
    id: Annotated[int, Column("OrderID")] = 0
    order_number: Annotated[Optional[str], Column("OrderNumber")] = None
    order_type: Annotated[Char, Column("OrderType")] = ""

    @property
    def is_bill_only(self) -> bool:
        return self.order_type == "B"


def fetch_table(conn, name, sql, params=()):
    cursor = conn.execute(sql, params)
    columns = [desc[0] for desc in cursor.description]
    return Table.from_records(name, columns, cursor.fetchall())


def main():
    conn = sqlite3.connect(":memory:")
    conn.execute(
        "CREATE TABLE Orders (OrderID INTEGER PRIMARY KEY, OrderNumber TEXT, OrderType TEXT)"
    )
    conn.execute("INSERT INTO Orders VALUES (1, '100', 'B')")
    conn.execute("INSERT INTO Orders VALUES (2, '101', 'S')")
    conn.commit()

    print("=== Row Mapping ===\n")

    # Single row
    print("1. Single Order:")
    table = fetch_table(conn, "Orders", "SELECT * FROM Orders WHERE OrderID = ?", (1,))
    order = map_table(Order, table)
    print(f"   Data: {order}")
    print(f"   Derived: is_bill_only = {order.is_bill_only}\n")

    # Many rows
    print("2. Search:")
    table = fetch_table(conn, "Orders", "SELECT * FROM Orders ORDER BY OrderID")
    for o in map_rows(Order, table):
        print(f"   - #{o.order_number} type={o.order_type}")
    print()

    # No rows -> None, not an empty list
    print("3. No Matches:")
    table = fetch_table(conn, "Orders", "SELECT * FROM Orders WHERE OrderID = ?", (99,))
    print(f"   Result: {map_rows(Order, table)}")

    conn.close()


if __name__ == "__main__":
    main()
