"""Pydantic schemas for the verified caller identity."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class VerifiedIdentity(BaseModel):
    """Claims taken from a verified identity token."""

    subject: str = Field(..., min_length=1, description="Stable identity provider subject")
    email: Optional[str] = Field(default=None, description="Email claim, if present")
    name: Optional[str] = Field(default=None, description="Name claim, if present")
    claims: dict[str, Any] = Field(default_factory=dict, description="All verified claims")
