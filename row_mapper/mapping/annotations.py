"""Mapping markers for use inside ``typing.Annotated``.

Example::

    @dataclass
    class Order:
        id: Annotated[int, Column("OrderID")] = 0
        line_items: Annotated[list[OrderLineItem], ChildTable("OrderLineItems")] = field(
            default_factory=list
        )
        is_bill_only: Annotated[bool, NotMapped] = False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from row_mapper.core.coercion import IntRange, SingleChar


@dataclass(frozen=True)
class Column:
    """Source column name for a scalar attribute."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Column name must be a non-empty string")


@dataclass(frozen=True)
class ChildTable:
    """Source child-table name for a collection attribute."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ChildTable name must be a non-empty string")


class NotMapped:
    """Excludes an attribute from mapping.

    May be used as the class itself or as an instance.
    """

    def __repr__(self) -> str:
        return "NotMapped()"


Int8 = Annotated[int, IntRange("Int8", -(2**7), 2**7 - 1)]
Int16 = Annotated[int, IntRange("Int16", -(2**15), 2**15 - 1)]
Int32 = Annotated[int, IntRange("Int32", -(2**31), 2**31 - 1)]
Int64 = Annotated[int, IntRange("Int64", -(2**63), 2**63 - 1)]
UInt8 = Annotated[int, IntRange("UInt8", 0, 2**8 - 1)]
Char = Annotated[str, SingleChar()]


def is_not_mapped(marker: object) -> bool:
    return marker is NotMapped or isinstance(marker, NotMapped)
