"""Pydantic schemas for advisory link checks."""

from typing import Optional

from pydantic import BaseModel, Field


class LinkCheckRequest(BaseModel):
    link: str = Field(..., description="URL to check")


class LinkCheckResponse(BaseModel):
    valid: bool
    link: Optional[str] = Field(default=None, description="Trimmed link when valid")
    code: Optional[str] = Field(default=None, description="Error code when invalid")
    error: Optional[str] = Field(default=None, description="Error message when invalid")
