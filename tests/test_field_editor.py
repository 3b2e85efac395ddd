"""
Unit tests for the generic field renderer / editor
"""

import pytest

from app.services.field_editor import (
    NOT_SET,
    UNSET,
    BooleanControl,
    NumberControl,
    PercentageControl,
    RatingControl,
    SelectControl,
    TextControl,
    coerce_value,
    format_option,
    parse_number,
    render,
)
from app.services.schema_registry import get_field


class Recorder:
    """Collects on_change calls"""

    def __init__(self):
        self.calls = []

    def __call__(self, key, value):
        self.calls.append((key, value))


@pytest.fixture
def recorder():
    return Recorder()


@pytest.mark.unit
class TestParsing:

    def test_format_option(self):
        assert format_option("to_watch") == "To watch"
        assert format_option("watched") == "Watched"

    @pytest.mark.parametrize("raw,expected", [
        ("", None),
        (None, None),
        ("2020", 2020),
        ("2.5", 2.5),
        ("  7 ", 7),
        (3, 3),
    ])
    def test_parse_number(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "nan", "1e999"])
    def test_parse_number_unparsable(self, raw):
        assert parse_number(raw) is UNSET

    def test_select_rejects_unknown_option(self):
        field = get_field("movies", "status")
        assert coerce_value(field, "abandoned") is UNSET
        assert coerce_value(field, "watched") == "watched"
        assert coerce_value(field, "") is None

    def test_date_normalized_to_iso(self):
        field = get_field("goals", "deadline")
        assert coerce_value(field, "2024-05-01") == "2024-05-01"
        assert coerce_value(field, "May 1st") is UNSET


@pytest.mark.unit
class TestRender:
    """Dispatch on the field's value kind"""

    @pytest.mark.parametrize("category_type,key,control_type", [
        ("movies", "genre", TextControl),
        ("movies", "notes", TextControl),
        ("movies", "year", NumberControl),
        ("movies", "status", SelectControl),
        ("movies", "rating", RatingControl),
        ("goals", "progress", PercentageControl),
        ("games", "multiplayer", BooleanControl),
    ])
    def test_control_type(self, category_type, key, control_type):
        control = render(get_field(category_type, key), None)
        assert type(control) is control_type

    def test_text_passes_through(self, recorder):
        control = render(get_field("movies", "genre"), "Drama", recorder)
        control.input("Thriller")
        assert recorder.calls == [("genre", "Thriller")]
        assert control.value == "Thriller"

    def test_textarea_widget_is_multiline(self):
        widget = render(get_field("movies", "notes"), None).as_widget()
        assert widget["multiline"] is True
        assert widget["value"] == ""

    def test_number_empty_writes_none(self, recorder):
        control = render(get_field("movies", "year"), 1999, recorder)
        control.input("")
        assert recorder.calls == [("year", None)]

    def test_number_parses(self, recorder):
        control = render(get_field("movies", "year"), None, recorder)
        control.input("2020")
        assert recorder.calls == [("year", 2020)]

    def test_number_unparsable_is_kept_but_not_written(self, recorder):
        control = render(get_field("movies", "year"), 1999, recorder)
        control.input("20x")
        assert recorder.calls == []
        assert control.raw == "20x"
        assert control.value == 1999

    def test_rating_click(self, recorder):
        control = render(get_field("movies", "rating"), None, recorder)
        assert control.display == NOT_SET
        control.click(4)
        assert recorder.calls == [("rating", 4)]
        assert control.display == "4/5"

    def test_rating_clamped(self, recorder):
        control = render(get_field("movies", "rating"), None, recorder)
        control.click(9)
        assert recorder.calls == [("rating", 5)]

    def test_stored_zero_rating_renders_unrated(self, recorder):
        control = render(get_field("movies", "rating"), 0, recorder)
        assert control.value is None
        assert control.display == NOT_SET

    def test_percentage_snaps_to_step(self, recorder):
        control = render(get_field("goals", "progress"), None, recorder)
        assert control.display == "0%"
        control.slide(42)
        assert recorder.calls == [("progress", 40)]
        assert control.display == "40%"

    def test_percentage_bounds(self, recorder):
        control = render(get_field("goals", "progress"), None, recorder)
        control.slide(140)
        control.slide(-3)
        assert recorder.calls == [("progress", 100), ("progress", 0)]

    def test_checkbox_only_true_is_checked(self, recorder):
        control = render(get_field("games", "multiplayer"), None, recorder)
        assert control.display == "No"
        control.toggle(True)
        control.toggle("indeterminate")
        assert recorder.calls == [("multiplayer", True), ("multiplayer", False)]

    def test_select_display_and_options(self):
        control = render(get_field("movies", "status"), "to_watch")
        assert control.display == "To watch"
        widget = control.as_widget()
        assert widget["options"][2] == {"value": "to_watch", "label": "To watch"}
        assert widget["placeholder"] == "Select Status"

    def test_select_unset_displays_not_set(self):
        assert render(get_field("movies", "status"), None).display == NOT_SET

    def test_readonly_control_never_writes(self, recorder):
        control = render(get_field("movies", "rating"), 3, recorder, readonly=True)
        control.click(5)
        control.input("1")
        assert recorder.calls == []
        assert control.value == 3
        assert control.as_widget()["readonly"] is True

    def test_control_without_callback(self):
        control = render(get_field("movies", "genre"), None)
        control.input("Comedy")
        assert control.value == "Comedy"
