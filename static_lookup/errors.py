"""Setup-time errors for static lookup tables.

All of these describe static, deterministic inputs: nothing here is worth
retrying, and no partial table is ever returned alongside them.
"""


class StaticTableError(ValueError):
    """Base class for table construction and commitment errors."""


class InvalidTableSize(StaticTableError):
    """Table (or basis) size is not a power of two."""

    def __init__(self, size: int) -> None:
        super().__init__(f"Table size must be a power of 2, got {size}")
        self.size = size


class DuplicateTableValue(StaticTableError):
    """Table values are not pairwise distinct."""

    def __init__(self, value: int, first_index: int, second_index: int) -> None:
        super().__init__(
            f"Duplicate table value {value} at indices {first_index} and {second_index}"
        )
        self.value = value
        self.indices = (first_index, second_index)


class ReferenceStringTooShort(StaticTableError):
    """The structured reference string cannot cover the requested commitment."""

    def __init__(self, group: str, needed: int, available: int) -> None:
        super().__init__(
            f"Reference string {group} needs at least {needed} elements, got {available}"
        )
        self.group = group
        self.needed = needed
        self.available = available


class BasisLengthMismatch(StaticTableError):
    """A precomputed basis does not have one element per table row."""

    def __init__(self, name: str, size: int, length: int) -> None:
        super().__init__(f"{name} has {length} elements, expected {size}")
        self.name = name
        self.size = size
        self.length = length
