"""Genre registry endpoint."""

from fastapi import APIRouter

from app.genres import DEFAULT_GENRE_CLASSES, list_genres
from app.schemas.genre import GenreRegistryResponse, GenreResponse

router = APIRouter()


@router.get(
    "",
    response_model=GenreRegistryResponse,
    summary="List genres",
    description="The genre registry in display order, with the fallback display classes.",
)
def get_genres() -> GenreRegistryResponse:
    """List registered genres."""
    return GenreRegistryResponse(
        genres=[GenreResponse.model_validate(genre) for genre in list_genres()],
        default_display_classes=DEFAULT_GENRE_CLASSES,
    )
