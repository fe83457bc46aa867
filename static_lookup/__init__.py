"""Static lookup tables for a cq-style PLONK lookup argument.

Preprocess a fixed table of field elements once, publish a constant-size
commitment, and let circuits constrain witness expressions to the table:

    from static_lookup import ReferenceString, StaticTable, TableId

    table = StaticTable.from_values(values, srs, circuit_domain=64)
    registry.register(TableId("bits"), table)
    cs.lookup_static("bits", lambda meta: (meta.query_advice(col), TableId("bits")))
"""

from static_lookup.argument import LookupArgument
from static_lookup.config import TableConfig
from static_lookup.errors import (
    BasisLengthMismatch,
    DuplicateTableValue,
    InvalidTableSize,
    ReferenceStringTooShort,
    StaticTableError,
)
from static_lookup.expression import (
    Advice,
    Constant,
    Expression,
    Fixed,
    Instance,
    Negated,
    Product,
    Scaled,
    Selector,
    Sum,
)
from static_lookup.registry import Column, ConstraintSystem, TableRegistry
from static_lookup.srs import ReferenceString
from static_lookup.table import CommittedTable, StaticTable, TableId, TableValues

__version__ = "0.1.0"
__all__ = [
    # Tables
    "TableId",
    "TableValues",
    "CommittedTable",
    "StaticTable",
    "TableConfig",
    "ReferenceString",
    # Lookups
    "LookupArgument",
    "ConstraintSystem",
    "TableRegistry",
    "Column",
    # Expressions
    "Expression",
    "Constant",
    "Selector",
    "Fixed",
    "Advice",
    "Instance",
    "Negated",
    "Sum",
    "Product",
    "Scaled",
    # Errors
    "StaticTableError",
    "InvalidTableSize",
    "DuplicateTableValue",
    "ReferenceStringTooShort",
    "BasisLengthMismatch",
]
