"""
Schema-validated metadata bag for items

The shape of an item's metadata is decided by its category type. Keys the
schema does not declare are dropped when the bag is cleaned and refused by
the typed accessors.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from app.services.field_editor import UNSET, Control, OnChange, coerce_value, render
from app.services.schema_registry import (
    CategoryTypeLike,
    FieldDescriptor,
    lookup,
    parse_category_type,
)

logger = logging.getLogger(__name__)


class UnknownMetadataKey(KeyError):
    """Raised when a key is not declared by the category schema"""

    def __init__(self, key: str, category_type: CategoryTypeLike):
        self.key = key
        self.category_type = category_type
        super().__init__(f"'{key}' is not a field of category type '{category_type}'")


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value is UNSET


def clean_metadata(category_type: CategoryTypeLike, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Keep only declared keys with usable values, coerced to their kind

    Unknown keys are logged and dropped.
    """
    data = data or {}
    fields = {field.key: field for field in lookup(category_type)}

    unknown = sorted(key for key in data if key not in fields)
    if unknown:
        logger.info(f"Dropping metadata keys not in the {category_type} schema: {unknown}")

    cleaned: Dict[str, Any] = {}
    for key, field in fields.items():
        if key not in data:
            continue
        value = coerce_value(field, data[key])
        if _is_empty(value):
            continue
        cleaned[key] = value
    return cleaned


class MetadataBag:
    """
    Metadata of one item, typed by its category schema

    Usage:
        bag = MetadataBag("movies", item.metadata_)
        control = bag.control("rating")
        control.click(5)          # writes through bag.set
        item.metadata_ = bag.to_dict()
    """

    def __init__(self, category_type: CategoryTypeLike, data: Optional[Dict[str, Any]] = None):
        self.category_type = parse_category_type(category_type)
        self.fields: List[FieldDescriptor] = lookup(self.category_type)
        self._by_key = {field.key: field for field in self.fields}
        self._data: Dict[str, Any] = clean_metadata(self.category_type, data)

    def _field(self, key: str) -> FieldDescriptor:
        field = self._by_key.get(key)
        if field is None:
            raise UnknownMetadataKey(key, self.category_type)
        return field

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str) -> Optional[Any]:
        """Typed value of a declared field, or None if not set"""
        self._field(key)
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        """Merge one field value; matches the field editor callback"""
        field = self._field(key)
        coerced = coerce_value(field, value)
        if coerced is UNSET:
            return
        if _is_empty(coerced):
            self._data.pop(key, None)
        else:
            self._data[key] = coerced

    def update(self, values: Dict[str, Any]) -> None:
        for key, value in values.items():
            self.set(key, value)

    def merge(self, values: Optional[Dict[str, Any]]) -> None:
        """
        Apply submitted values like `update`, dropping undeclared keys

        Unparsable values leave the stored value in place.
        """
        values = values or {}
        unknown = sorted(key for key in values if key not in self._by_key)
        if unknown:
            logger.info(f"Dropping metadata keys not in the {self.category_type} schema: {unknown}")
        self.update({key: value for key, value in values.items() if key in self._by_key})

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def control(self, key: str, on_change: Optional[OnChange] = None, readonly: bool = False) -> Control:
        """Control for one field, writing back into this bag by default"""
        field = self._field(key)
        callback = None if readonly else (on_change or self.set)
        return render(field, self._data.get(key), callback, readonly=readonly)

    def controls(self, on_change: Optional[OnChange] = None, readonly: bool = False) -> List[Control]:
        return [self.control(field.key, on_change=on_change, readonly=readonly) for field in self.fields]

    def display(self) -> List[Tuple[str, str]]:
        """(label, text) pairs for detail views"""
        return [(control.field.label, control.display) for control in self.controls(readonly=True)]
