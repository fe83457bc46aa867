"""Circuit-side registration of static tables and static lookups.

ConstraintSystem collects LookupArguments while a circuit is configured;
TableRegistry maps TableIds to StaticTables while it is synthesized. The two
meet when keys are generated: every TableId a lookup names must have a table.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Tuple

from static_lookup.argument import LookupArgument
from static_lookup.expression import Advice, Expression, Fixed, Instance, Selector
from static_lookup.table import CommittedTable, StaticTable, TableId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Column:
    """A column handle: kind is 'advice', 'fixed' or 'instance'."""
    kind: str
    index: int


class ConstraintSystem:
    """Column allocation and static lookup registration."""

    def __init__(self) -> None:
        self.num_advice_columns = 0
        self.num_fixed_columns = 0
        self.num_instance_columns = 0
        self.num_selectors = 0
        self.static_lookups: List[LookupArgument] = []

    # --- Columns ---

    def advice_column(self) -> Column:
        column = Column("advice", self.num_advice_columns)
        self.num_advice_columns += 1
        return column

    def fixed_column(self) -> Column:
        column = Column("fixed", self.num_fixed_columns)
        self.num_fixed_columns += 1
        return column

    def instance_column(self) -> Column:
        column = Column("instance", self.num_instance_columns)
        self.num_instance_columns += 1
        return column

    def selector(self) -> Selector:
        selector = Selector(self.num_selectors)
        self.num_selectors += 1
        return selector

    def query_advice(self, column: Column, rotation: int = 0) -> Advice:
        _expect_kind(column, "advice")
        return Advice(column.index, rotation)

    def query_fixed(self, column: Column, rotation: int = 0) -> Fixed:
        _expect_kind(column, "fixed")
        return Fixed(column.index, rotation)

    def query_instance(self, column: Column, rotation: int = 0) -> Instance:
        _expect_kind(column, "instance")
        return Instance(column.index, rotation)

    # --- Lookups ---

    def lookup_static(
        self,
        name: str,
        table_map: Callable[["ConstraintSystem"], Tuple[Expression, TableId]],
    ) -> int:
        """Register a static lookup and return its index.

        table_map receives this constraint system (to query columns) and
        returns the input expression and the id of the table it must hit.
        """
        expr, table_id = table_map(self)
        if not isinstance(expr, Expression):
            raise TypeError(f"Lookup '{name}' input must be an Expression, got {type(expr).__name__}")
        if not isinstance(table_id, TableId):
            raise TypeError(f"Lookup '{name}' table must be a TableId, got {type(table_id).__name__}")

        index = len(self.static_lookups)
        self.static_lookups.append(LookupArgument(name, expr, table_id))
        logger.debug("Registered static lookup %d '%s' into table %s", index, name, table_id)
        return index

    def static_table_ids(self) -> List[TableId]:
        """Distinct table ids referenced by lookups, in sorted order."""
        return sorted({lookup.table_id for lookup in self.static_lookups})

    def degree(self) -> int:
        """Largest degree any registered static lookup requires (at least 1)."""
        return max([1] + [lookup.required_degree() for lookup in self.static_lookups])


def _expect_kind(column: Column, kind: str) -> None:
    if column.kind != kind:
        raise ValueError(f"Expected {kind} column, got {column.kind} column {column.index}")


class TableRegistry:
    """Circuit-wide map TableId -> StaticTable, iterated in id order."""

    def __init__(self) -> None:
        self._tables: Dict[TableId, StaticTable] = {}

    def register(self, table_id: TableId, table: StaticTable) -> None:
        """Associate a table with an id.

        Registering the same table twice is a no-op (synthesis may run more than
        once); a different table under an existing id is an error.
        """
        existing = self._tables.get(table_id)
        if existing is not None:
            if existing is table or existing == table:
                return
            raise ValueError(f"Table {table_id} is already registered with different contents")
        self._tables[table_id] = table
        logger.debug("Registered static table %s", table_id)

    def get(self, table_id: TableId) -> StaticTable:
        try:
            return self._tables[table_id]
        except KeyError:
            raise KeyError(f"Table {table_id} is not registered") from None

    def __contains__(self, table_id: object) -> bool:
        return table_id in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[TableId]:
        return iter(sorted(self._tables))

    def items(self) -> List[Tuple[TableId, StaticTable]]:
        return [(table_id, self._tables[table_id]) for table_id in self]

    def committed(self) -> Dict[TableId, CommittedTable]:
        """Verifier-side map; every registered table must carry its commitment."""
        result = {}
        for table_id, table in self.items():
            if table.committed is None:
                raise ValueError(f"Table {table_id} has no committed part")
            result[table_id] = table.committed
        return result

    def missing(self, cs: ConstraintSystem) -> List[TableId]:
        """Table ids used by cs lookups that have no registered table."""
        return [table_id for table_id in cs.static_table_ids() if table_id not in self._tables]

    def unsatisfied_lookups(
        self,
        cs: ConstraintSystem,
        row_resolver: Callable[[int], Callable[[Expression], int]],
        n_rows: int,
    ) -> List[Tuple[str, int]]:
        """Check every static lookup on every row against the opened tables.

        Args:
            cs: Constraint system holding the lookups
            row_resolver: row -> resolver for that row's column queries
            n_rows: Number of usable rows

        Returns:
            (lookup name, row) pairs whose input is not in the table
        """
        failures = []
        for lookup in cs.static_lookups:
            table = self.get(lookup.table_id)
            if table.opened is None:
                raise ValueError(f"Table {lookup.table_id} has no opened values to check against")
            for row in range(n_rows):
                if not lookup.is_satisfied(row_resolver(row), table.opened):
                    failures.append((lookup.name, row))
        return failures
