"""Pydantic schemas for the genre registry."""

from pydantic import BaseModel, ConfigDict


class GenreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    value: str
    label: str
    display_classes: str


class GenreRegistryResponse(BaseModel):
    genres: list[GenreResponse]
    default_display_classes: str
