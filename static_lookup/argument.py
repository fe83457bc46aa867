"""Lookup argument: a witness expression checked against a static table."""

from dataclasses import dataclass
from typing import Callable

from static_lookup.expression import Expression
from static_lookup.table import TableId, TableValues


@dataclass(frozen=True)
class LookupArgument:
    """Constrains `input` to take values in the table named by `table_id`."""
    name: str
    input: Expression
    table_id: TableId

    def required_degree(self) -> int:
        """Degree the lookup gate needs in the constraint system.

        The gate is B(X) * (q(X) * f(X) - beta) - 1, which is at least cubic.
        """
        return max(3, 2 + self.input.degree())

    def input_value(self, resolve: Callable[[Expression], int], modulus: int) -> int:
        """Evaluate the input at one row, reduced modulo the field order."""
        return int(self.input.evaluate(resolve)) % modulus

    def is_satisfied(self, resolve: Callable[[Expression], int], table: TableValues) -> bool:
        """True when the input at this row is a table value."""
        return self.input_value(resolve, table.engine.scalar_field.order) in table
