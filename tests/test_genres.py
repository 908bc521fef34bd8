"""Data-integrity tests for the genre registry."""

import pytest

from app.genres import (
    DEFAULT_GENRE_CLASSES,
    GENRES,
    GENRE_MAP,
    Genre,
    display_classes_for,
    get_genre,
    is_registered_genre,
)
from app.genres.registry import _build_index


class TestGenres:
    """Tests for the registry sequence."""

    def test_not_empty(self):
        assert len(GENRES) > 0

    def test_fields_non_empty(self):
        """Every genre has a value, label and display classes."""
        for genre in GENRES:
            assert genre.value.strip()
            assert genre.label.strip()
            assert genre.display_classes.strip()

    def test_no_duplicate_values(self):
        values = [genre.value for genre in GENRES]
        assert len(set(values)) == len(values)

    def test_values_are_lowercase(self):
        """Values match how genres are stored."""
        for genre in GENRES:
            assert genre.value == genre.value.lower()


class TestGenreMap:
    """Tests for the derived lookup index."""

    def test_one_entry_per_genre(self):
        assert len(GENRE_MAP) == len(GENRES)

    def test_maps_back_to_record(self):
        for genre in GENRES:
            assert GENRE_MAP[genre.value] == genre

    def test_membership_is_exact(self):
        """Lookup is case-sensitive and whitespace-sensitive."""
        assert is_registered_genre("action")
        assert not is_registered_genre("Action")
        assert not is_registered_genre(" action")
        assert not is_registered_genre("")
        assert get_genre("western") is None

    def test_rejects_duplicate_values(self):
        with pytest.raises(ValueError):
            _build_index((Genre("drama", "Drama", "a"), Genre("drama", "Drama 2", "b")))

    def test_rejects_uppercase_values(self):
        with pytest.raises(ValueError):
            _build_index((Genre("Drama", "Drama", "a"),))


class TestDisplayFallback:
    """Tests for display classes of unknown genres."""

    def test_default_is_non_empty(self):
        assert DEFAULT_GENRE_CLASSES.strip()

    def test_known_genre(self):
        assert display_classes_for("horror") == GENRE_MAP["horror"].display_classes

    def test_unknown_genre_falls_back(self):
        assert display_classes_for("western") == DEFAULT_GENRE_CLASSES
