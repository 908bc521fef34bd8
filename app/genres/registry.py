"""
Genre registry.

The registry is the single source of truth for valid recommendation genres.
Write paths check membership against it; presentation reads labels and
display classes from it. The ``value`` of each entry is the lowercase key
stored on recommendation rows.

Example usage:

    if not is_registered_genre(genre):
        raise InvalidGenreError(genre)

    classes = display_classes_for(recommendation.genre)
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Genre:
    """
    A single registry entry.

    Attributes:
        value: Canonical lowercase storage key
        label: Display text
        display_classes: Presentation metadata, passed through untouched
    """

    value: str
    label: str
    display_classes: str


GENRES: tuple[Genre, ...] = (
    Genre("action", "Action", "bg-orange-500/15 text-orange-300 border-orange-500/20"),
    Genre("animation", "Animation", "bg-green-500/15 text-green-300 border-green-500/20"),
    Genre("comedy", "Comedy", "bg-yellow-500/15 text-yellow-300 border-yellow-500/20"),
    Genre("documentary", "Documentary", "bg-teal-500/15 text-teal-300 border-teal-500/20"),
    Genre("drama", "Drama", "bg-purple-500/15 text-purple-300 border-purple-500/20"),
    Genre("fantasy", "Fantasy", "bg-indigo-500/15 text-indigo-300 border-indigo-500/20"),
    Genre("horror", "Horror", "bg-red-500/15 text-red-300 border-red-500/20"),
    Genre("romance", "Romance", "bg-pink-500/15 text-pink-300 border-pink-500/20"),
    Genre("sci-fi", "Sci-Fi", "bg-cyan-500/15 text-cyan-300 border-cyan-500/20"),
    Genre("thriller", "Thriller", "bg-rose-500/15 text-rose-300 border-rose-500/20"),
)

# Shown for rows whose genre has since left the registry
DEFAULT_GENRE_CLASSES = "bg-zinc-700/50 text-zinc-300 border-zinc-600/30"


def _build_index(genres: tuple[Genre, ...]) -> dict[str, Genre]:
    index: dict[str, Genre] = {}
    for genre in genres:
        if not genre.value or genre.value != genre.value.lower():
            raise ValueError(f"Genre value must be non-empty lowercase: {genre.value!r}")
        if genre.value in index:
            raise ValueError(f"Duplicate genre value: {genre.value!r}")
        index[genre.value] = genre
    logger.debug(f"Loaded {len(index)} genres")
    return index


GENRE_MAP: dict[str, Genre] = _build_index(GENRES)


def is_registered_genre(value: str) -> bool:
    """Return True if ``value`` is an exact registry key."""
    return value in GENRE_MAP


def get_genre(value: str) -> Optional[Genre]:
    """
    Look up a registry entry.

    Args:
        value: Genre storage key

    Returns:
        Genre entry or None if not registered
    """
    return GENRE_MAP.get(value)


def display_classes_for(value: str) -> str:
    """Display classes for a stored genre, falling back to the default."""
    genre = GENRE_MAP.get(value)
    return genre.display_classes if genre else DEFAULT_GENRE_CLASSES


def list_genres() -> list[Genre]:
    """List registry entries in declared order."""
    return list(GENRES)
