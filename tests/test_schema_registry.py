"""
Unit tests for the category schema registry
"""

import pytest

from app.services.schema_registry import (
    CATEGORY_SCHEMAS,
    CategoryType,
    FieldKind,
    field_keys,
    get_field,
    lookup,
    parse_category_type,
    supports_rank,
    uses_items,
)


@pytest.mark.unit
class TestLookup:
    """Field lists per category type"""

    def test_every_type_has_an_entry(self):
        assert set(CATEGORY_SCHEMAS) == set(CategoryType)
        assert len(CategoryType) == 14

    def test_movie_fields_in_order(self):
        keys = [field.key for field in lookup("movies")]
        assert keys == [
            "year", "genre", "status", "rating", "mood_type",
            "runtime", "director", "platform", "rewatch_value", "notes",
        ]

    def test_media_matches_movies(self):
        assert lookup(CategoryType.MEDIA) == lookup(CategoryType.MOVIES)

    def test_tvshows_fields(self):
        keys = [field.key for field in lookup("tvshows")]
        assert keys[:5] == ["year", "genre", "status", "rating", "mood_type"]
        assert "seasons" in keys and "episodes" in keys and "creator" in keys

    @pytest.mark.parametrize("category_type", ["fitness", "finance", "todos", "general"])
    def test_types_without_item_fields(self, category_type):
        assert lookup(category_type) == []

    @pytest.mark.parametrize("category_type", [None, "", "unknown", "Movies"])
    def test_unknown_type_resolves_to_empty_list(self, category_type):
        assert lookup(category_type) == []
        assert parse_category_type(category_type) is None

    def test_lookup_returns_a_new_list(self):
        fields = lookup("music")
        fields.clear()
        assert len(lookup("music")) == 8

    def test_select_options(self):
        status = get_field("movies", "status")
        assert status.kind is FieldKind.SELECT
        assert status.options == ("watched", "watching", "to_watch")
        assert status.as_dict() == {
            "key": "status",
            "label": "Status",
            "type": "select",
            "options": ["watched", "watching", "to_watch"],
        }

    def test_non_select_descriptor_has_no_options(self):
        assert get_field("goals", "progress").as_dict() == {
            "key": "progress",
            "label": "Progress %",
            "type": "progress",
        }

    def test_games_multiplayer_is_checkbox(self):
        assert get_field("games", "multiplayer").kind is FieldKind.CHECKBOX

    def test_field_keys(self):
        assert field_keys("career") == {
            "skills_learned", "courses", "tools_used",
            "certifications", "feedback", "career_direction",
        }

    def test_get_field_unknown_key(self):
        assert get_field("movies", "author") is None


@pytest.mark.unit
class TestCategoryCapabilities:
    """Rank support and item usage"""

    @pytest.mark.parametrize("category_type", ["movies", "tvshows", "music", "reading", "media"])
    def test_ranked_types(self, category_type):
        assert supports_rank(category_type) is True

    @pytest.mark.parametrize("category_type", ["general", "goals", "games", "travel", "ideas", "career", "fitness"])
    def test_unranked_types(self, category_type):
        assert supports_rank(category_type) is False

    @pytest.mark.parametrize("category_type", ["fitness", "finance", "todos"])
    def test_dedicated_types_do_not_use_items(self, category_type):
        assert uses_items(category_type) is False

    def test_generic_types_use_items(self):
        assert uses_items(CategoryType.GENERAL) is True
        assert uses_items("travel") is True
