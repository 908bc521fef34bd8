"""Genre registry."""

from app.genres.registry import (
    Genre,
    GENRES,
    GENRE_MAP,
    DEFAULT_GENRE_CLASSES,
    is_registered_genre,
    get_genre,
    display_classes_for,
    list_genres,
)

__all__ = [
    "Genre",
    "GENRES",
    "GENRE_MAP",
    "DEFAULT_GENRE_CLASSES",
    "is_registered_genre",
    "get_genre",
    "display_classes_for",
    "list_genres",
]
