"""
Generic field renderer / editor

Turns a field descriptor and its current value into a control object.
Every control writes through the same callback shape:

    on_change(key, value) -> None

The caller owns the metadata bag and merges the key itself. Controls only
coerce input to the field's value kind; they never reject a submission.
"""
import logging
from datetime import date
from typing import Any, Callable, Dict, Optional, Type

from app.services.schema_registry import FieldDescriptor, FieldKind

logger = logging.getLogger(__name__)

OnChange = Callable[[str, Any], None]

NOT_SET = "Not set"

RATING_MIN = 1
RATING_MAX = 5
PERCENT_MIN = 0
PERCENT_MAX = 100
PERCENT_STEP = 5


class _Unset:
    """Marker for input that has no usable value"""

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


def format_option(option: str) -> str:
    """Human label for a select option: 'to_watch' -> 'To watch'"""
    if not option:
        return option
    return option[0].upper() + option[1:].replace("_", " ", 1)


def parse_number(raw: Any):
    """Parse numeric input; None for empty input, UNSET if unparsable"""
    if raw is None or isinstance(raw, bool):
        return None if raw is None else UNSET
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip()
    if text == "":
        return None
    try:
        number = float(text)
    except ValueError:
        return UNSET
    if number != number or number in (float("inf"), float("-inf")):
        return UNSET
    return int(number) if number.is_integer() else number


def clamp_rating(raw: Any) -> Optional[int]:
    number = parse_number(raw)
    if number is None or number is UNSET:
        return None
    return max(RATING_MIN, min(RATING_MAX, int(round(number))))


def snap_percentage(raw: Any) -> Optional[int]:
    number = parse_number(raw)
    if number is None or number is UNSET:
        return None
    snapped = int(round(number / PERCENT_STEP)) * PERCENT_STEP
    return max(PERCENT_MIN, min(PERCENT_MAX, snapped))


def coerce_value(field: FieldDescriptor, raw: Any):
    """
    Coerce a raw value to the field's value kind

    Returns None when the value is explicitly unset and UNSET when the
    input cannot be turned into a usable value.
    """
    kind = field.kind
    if kind in (FieldKind.TEXT, FieldKind.TEXTAREA):
        if raw is None:
            return None
        return raw if isinstance(raw, str) else str(raw)
    if kind is FieldKind.NUMBER:
        return parse_number(raw)
    if kind is FieldKind.SELECT:
        if raw is None or raw == "":
            return None
        return raw if raw in field.options else UNSET
    if kind is FieldKind.DATE:
        if raw is None or raw == "":
            return None
        if isinstance(raw, date):
            return raw.isoformat()
        try:
            return date.fromisoformat(str(raw)).isoformat()
        except ValueError:
            return UNSET
    if kind is FieldKind.RATING:
        number = parse_number(raw)
        if number is UNSET:
            return UNSET
        # 0 stars is the unrated default
        if number is None or number == 0:
            return None
        return clamp_rating(number)
    if kind is FieldKind.PROGRESS:
        percent = snap_percentage(raw)
        return UNSET if percent is None and raw not in (None, "") else percent
    if kind is FieldKind.CHECKBOX:
        return raw is True
    return UNSET


class Control:
    """Base control bound to one field"""

    default: Any = None

    def __init__(
        self,
        field: FieldDescriptor,
        value: Any = None,
        on_change: Optional[OnChange] = None,
        readonly: bool = False,
    ):
        self.field = field
        self.on_change = on_change
        self.readonly = readonly
        coerced = coerce_value(field, value)
        self.value = None if coerced is UNSET else coerced

    @property
    def key(self) -> str:
        return self.field.key

    @property
    def is_set(self) -> bool:
        return self.value is not None and self.value != ""

    @property
    def display(self) -> str:
        if not self.is_set:
            return NOT_SET
        return str(self.value)

    def _write(self, value: Any) -> None:
        if self.readonly:
            logger.debug(f"Ignoring write to read-only control: {self.key}")
            return
        self.value = value
        if self.on_change is not None:
            self.on_change(self.key, value)

    def input(self, raw: Any) -> None:
        """Feed raw user input to the control"""
        coerced = coerce_value(self.field, raw)
        if coerced is UNSET:
            return
        self._write(coerced)

    def widget(self) -> Dict[str, Any]:
        return {}

    def as_widget(self) -> Dict[str, Any]:
        """Serializable description of the control"""
        data = {
            "key": self.key,
            "label": self.field.label,
            "type": self.field.kind.value,
            "value": self.value if self.is_set else self.default,
            "display": self.display,
            "readonly": self.readonly,
        }
        data.update(self.widget())
        return data


class TextControl(Control):

    default = ""

    def widget(self) -> Dict[str, Any]:
        return {"multiline": self.field.kind is FieldKind.TEXTAREA, "placeholder": self.field.label}


class NumberControl(Control):
    """Numeric input; unparsable text stays in `raw` and is not written"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.raw = "" if self.value is None else str(self.value)

    def input(self, raw: Any) -> None:
        self.raw = "" if raw is None else str(raw)
        number = parse_number(raw)
        if number is UNSET:
            return
        self._write(number)

    def widget(self) -> Dict[str, Any]:
        return {"raw": self.raw, "placeholder": self.field.label}


class SelectControl(Control):

    @property
    def display(self) -> str:
        if not self.is_set:
            return NOT_SET
        return format_option(self.value)

    def widget(self) -> Dict[str, Any]:
        return {
            "placeholder": f"Select {self.field.label}",
            "options": [
                {"value": option, "label": format_option(option)}
                for option in self.field.options
            ],
        }


class DateControl(Control):
    pass


class RatingControl(Control):
    """1-5 stars; clicking star n sets n"""

    default = 0

    def click(self, star: int) -> None:
        rating = clamp_rating(star)
        if rating is None:
            return
        self._write(rating)

    @property
    def display(self) -> str:
        if not self.is_set:
            return NOT_SET
        return f"{self.value}/{RATING_MAX}"

    def widget(self) -> Dict[str, Any]:
        return {"min": RATING_MIN, "max": RATING_MAX, "step": 1}


class PercentageControl(Control):
    """0-100 slider in steps of 5"""

    default = 0

    def slide(self, position: Any) -> None:
        percent = snap_percentage(position)
        if percent is None:
            return
        self._write(percent)

    @property
    def display(self) -> str:
        return f"{self.value or 0}%"

    def widget(self) -> Dict[str, Any]:
        return {"min": PERCENT_MIN, "max": PERCENT_MAX, "step": PERCENT_STEP}


class BooleanControl(Control):
    """Checkbox; indeterminate input stores False"""

    default = False

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.value = self.value is True

    @property
    def is_set(self) -> bool:
        return True

    def toggle(self, checked: Any) -> None:
        self._write(checked is True)

    @property
    def display(self) -> str:
        return "Yes" if self.value else "No"


CONTROL_TYPES: Dict[FieldKind, Type[Control]] = {
    FieldKind.TEXT: TextControl,
    FieldKind.TEXTAREA: TextControl,
    FieldKind.NUMBER: NumberControl,
    FieldKind.SELECT: SelectControl,
    FieldKind.DATE: DateControl,
    FieldKind.RATING: RatingControl,
    FieldKind.PROGRESS: PercentageControl,
    FieldKind.CHECKBOX: BooleanControl,
}


def render(
    field: FieldDescriptor,
    current_value: Any,
    on_change: Optional[OnChange] = None,
    readonly: bool = False,
) -> Control:
    """Build the control matching the field's value kind"""
    control_type = CONTROL_TYPES[field.kind]
    return control_type(field, current_value, on_change=on_change, readonly=readonly)
