"""Tabular input containers.

Tables and result sets hold already-materialized query output. Rows are
plain mappings from column name to value, with ``None`` as the database
null marker (DB-API convention).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

Row = Mapping[str, Any]

# Returned by lookup_value when a column is absent; distinct from a NULL cell.
MISSING = object()


def find_name(names: Iterable[str], name: str, case_sensitive: bool = True) -> str | None:
    """Return the entry of ``names`` matching ``name``, or None.

    Case-insensitive matching prefers an exact match over a casefolded one.
    """
    if case_sensitive:
        return name if name in names else None
    folded = name.casefold()
    candidate = None
    for existing in names:
        if existing == name:
            return existing
        if candidate is None and existing.casefold() == folded:
            candidate = existing
    return candidate


def lookup_value(row: Row, column: str, case_sensitive: bool = True) -> Any:
    """Look up a column value, returning the ``MISSING`` sentinel if absent."""
    if column in row:
        return row[column]
    if case_sensitive:
        return MISSING
    key = find_name(row.keys(), column, case_sensitive=False)
    if key is None:
        return MISSING
    return row[key]


@dataclass(frozen=True)
class Table:
    """A named, ordered sequence of rows.

    Rows are expected to share one column set; this is not enforced here.
    """

    name: str
    rows: tuple[Row, ...] = ()
    columns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))
        columns = tuple(self.columns)
        if not columns and self.rows:
            columns = tuple(self.rows[0].keys())
        object.__setattr__(self, "columns", columns)

    @classmethod
    def from_records(
        cls,
        name: str,
        columns: Sequence[str],
        records: Iterable[Sequence[Any]],
    ) -> Table:
        """Build a table from positional records, such as DB-API cursor output.

        Args:
            name: Table name.
            columns: Column names, in record order.
            records: Tuple-like rows.

        Raises:
            ValueError: If a record's length differs from the column count.
        """
        columns = tuple(columns)
        rows = tuple(dict(zip(columns, record, strict=True)) for record in records)
        return cls(name=name, rows=rows, columns=columns)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]


@dataclass(frozen=True)
class ResultSet:
    """An ordered collection of tables; the first table is the primary one.

    Tables are addressable by position and by name.

    Raises:
        ValueError: If two tables share the same name.
    """

    tables: tuple[Table, ...] = ()
    _by_name: dict[str, Table] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tables", tuple(self.tables))
        for table in self.tables:
            if table.name in self._by_name:
                raise ValueError(f"Duplicate table name in result set: '{table.name}'")
            self._by_name[table.name] = table

    @classmethod
    def of(cls, *tables: Table) -> ResultSet:
        """Build a result set from tables given positionally."""
        return cls(tables=tables)

    @property
    def primary(self) -> Table | None:
        """The first table, or None for an empty result set."""
        return self.tables[0] if self.tables else None

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self.tables]

    def get(self, name: str, case_sensitive: bool = True) -> Table | None:
        """Look up a table by name."""
        key = find_name(self._by_name.keys(), name, case_sensitive)
        return None if key is None else self._by_name[key]

    def has(self, name: str, case_sensitive: bool = True) -> bool:
        """Whether a table named ``name`` exists, under the given matching policy."""
        return find_name(self._by_name.keys(), name, case_sensitive) is not None

    def __contains__(self, name: object) -> bool:
        # Exact match only; use has() or get() for case-insensitive lookups.
        return name in self._by_name

    def __len__(self) -> int:
        return len(self.tables)

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    def __getitem__(self, index: int) -> Table:
        return self.tables[index]


TableInput = Union[Table, Sequence[Row]]


def rows_of(table: TableInput | None) -> Sequence[Row]:
    """Return the rows of a Table or plain row sequence (empty if None)."""
    if table is None:
        return ()
    if isinstance(table, Table):
        return table.rows
    return table
