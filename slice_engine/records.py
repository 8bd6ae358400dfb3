"""
Record capability consumed by the splitter and the aligner.

The engine never builds a record from scratch. It reads the quantity key and
the value attributes, and asks an existing record for a copy with new ones.
Callers either implement SplitItem on their own types, mix FieldSplitItem into
a dataclass, or wrap ledger rows with DictSplitItem.
"""

import dataclasses
from typing import Any, Dict, List, Mapping, Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class SplitItem(Protocol):
    """A record with a quantity key and value attributes scaled with it."""

    def get_key(self) -> Any:
        ...

    def get_values(self) -> List[Any]:
        ...

    def with_key_and_values(self, key: Any, values: Sequence[Any]) -> 'SplitItem':
        ...


class FieldSplitItem:
    """
    SplitItem implementation for dataclasses.

    Subclasses name their quantity field and value fields:

        @dataclass(frozen=True)
        class Lot(FieldSplitItem):
            key_field = 'qty'
            value_fields = ('price',)

            lot_id: str
            qty: int
            price: int

    Fields not listed (ids, timestamps) are copied unchanged to both halves.
    """

    key_field: str = 'qty'
    value_fields: Tuple[str, ...] = ()

    def get_key(self):
        return getattr(self, self.key_field)

    def get_values(self) -> List[Any]:
        return [getattr(self, name) for name in self.value_fields]

    def with_key_and_values(self, key, values):
        if len(values) != len(self.value_fields):
            raise ValueError(
                f"{type(self).__name__} has {len(self.value_fields)} value fields, got {len(values)} values"
            )
        changes = dict(zip(self.value_fields, values))
        changes[self.key_field] = key
        return dataclasses.replace(self, **changes)


class DictSplitItem:
    """
    SplitItem wrapper around a plain dict row.

    Usage:
        buys = [DictSplitItem(row, 'size', ['cost_usd']) for row in rows]
    """

    __slots__ = ('data', 'key_field', 'value_fields')

    def __init__(self, data: Mapping[str, Any], key_field: str, value_fields: Sequence[str] = ()):
        missing = [name for name in (key_field, *value_fields) if name not in data]
        if missing:
            raise KeyError(f"Row is missing fields: {', '.join(missing)}")
        self.data: Dict[str, Any] = dict(data)
        self.key_field = key_field
        self.value_fields = tuple(value_fields)

    def get_key(self):
        return self.data[self.key_field]

    def get_values(self) -> List[Any]:
        return [self.data[name] for name in self.value_fields]

    def with_key_and_values(self, key, values) -> 'DictSplitItem':
        if len(values) != len(self.value_fields):
            raise ValueError(f"Expected {len(self.value_fields)} values, got {len(values)}")
        data = dict(self.data)
        data[self.key_field] = key
        data.update(zip(self.value_fields, values))
        return DictSplitItem(data, self.key_field, self.value_fields)

    def __eq__(self, other):
        if not isinstance(other, DictSplitItem):
            return NotImplemented
        return (
            self.data == other.data
            and self.key_field == other.key_field
            and self.value_fields == other.value_fields
        )

    def __repr__(self) -> str:
        return f"DictSplitItem({self.data!r}, key_field={self.key_field!r})"
