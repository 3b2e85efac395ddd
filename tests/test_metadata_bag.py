"""
Unit tests for the schema-validated metadata bag
"""

import logging

import pytest

from app.services.metadata_bag import MetadataBag, UnknownMetadataKey, clean_metadata


@pytest.mark.unit
class TestCleanMetadata:

    def test_unknown_keys_are_dropped_and_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="app.services.metadata_bag"):
            cleaned = clean_metadata("movies", {"rating": 4, "author": "Someone"})
        assert cleaned == {"rating": 4}
        assert "author" in caplog.text

    def test_values_are_coerced(self):
        cleaned = clean_metadata("movies", {"year": "1999", "rating": "7", "status": "watched"})
        assert cleaned == {"year": 1999, "rating": 5, "status": "watched"}

    def test_empty_and_invalid_values_are_dropped(self):
        cleaned = clean_metadata("movies", {"genre": "", "status": "lost", "year": "abc"})
        assert cleaned == {}

    def test_types_without_schema_keep_nothing(self):
        assert clean_metadata("general", {"anything": 1}) == {}
        assert clean_metadata("unknown", {"rating": 5}) == {}

    def test_none_input(self):
        assert clean_metadata("movies", None) == {}

    def test_zero_rating_means_unrated(self):
        assert clean_metadata("movies", {"rating": 0, "year": 2010}) == {"year": 2010}
        assert clean_metadata("movies", {"rating": "0"}) == {}

    def test_low_rating_is_clamped_to_one_star(self):
        assert clean_metadata("movies", {"rating": 0.6}) == {"rating": 1}


@pytest.mark.unit
class TestMetadataBag:

    def test_get_and_set(self):
        bag = MetadataBag("reading", {"author": "Le Guin"})
        assert bag.get("author") == "Le Guin"
        assert bag.get("rating") is None
        bag.set("rating", 5)
        assert bag.to_dict() == {"author": "Le Guin", "rating": 5}

    def test_set_empty_clears(self):
        bag = MetadataBag("reading", {"author": "Le Guin"})
        bag.set("author", "")
        assert "author" not in bag
        assert len(bag) == 0

    def test_unknown_key_is_refused(self):
        bag = MetadataBag("reading")
        with pytest.raises(UnknownMetadataKey):
            bag.set("director", "Someone")
        with pytest.raises(KeyError):
            bag.get("director")

    def test_control_writes_back_into_bag(self):
        bag = MetadataBag("goals")
        bag.control("progress").slide(57)
        bag.control("motivation_level").click(3)
        assert bag.to_dict() == {"progress": 55, "motivation_level": 3}

    def test_update_merges(self):
        bag = MetadataBag("games", {"platform": "PC", "hours_played": 10})
        bag.update({"hours_played": "12.5", "multiplayer": True})
        assert bag.to_dict() == {"platform": "PC", "hours_played": 12.5, "multiplayer": True}

    def test_merge_keeps_value_on_unparsable_input(self, caplog):
        bag = MetadataBag("movies", {"year": 2010, "rating": 5})
        with caplog.at_level(logging.INFO, logger="app.services.metadata_bag"):
            bag.merge({"year": "abc", "genre": "Drama", "author": "Someone"})
        assert bag.to_dict() == {"year": 2010, "rating": 5, "genre": "Drama"}
        assert "author" in caplog.text

    def test_display_lists_every_field(self):
        bag = MetadataBag("movies", {"rating": 4, "status": "to_watch"})
        display = dict(bag.display())
        assert display["Rating"] == "4/5"
        assert display["Status"] == "To watch"
        assert display["Director"] == "Not set"
        assert len(display) == 10

    def test_controls_are_readonly_on_request(self):
        bag = MetadataBag("movies", {"rating": 2})
        controls = bag.controls(readonly=True)
        for control in controls:
            control.input("1")
        assert bag.to_dict() == {"rating": 2}

    def test_iteration(self):
        bag = MetadataBag("music", {"artist": "Nina Simone", "year": 1965})
        assert sorted(bag) == ["artist", "year"]
