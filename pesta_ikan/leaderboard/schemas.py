"""
Score schemas shared by the API and the client.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


USERNAME_MAX_LENGTH = 15
# Largest value the score column holds on every backend
SCORE_MAX = 2_147_483_647


class ScoreInput(BaseModel):
    """Body of ``POST /scores``."""
    username: str
    score: int = Field(..., ge=0, le=SCORE_MAX, strict=True)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        if len(v) > USERNAME_MAX_LENGTH:
            raise ValueError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
        return v


class ScoreOut(BaseModel):
    """A stored score row as returned by the API."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    username: str
    score: int
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )


class ErrorMessage(BaseModel):
    """Body of a 400/404 response."""
    message: str
    field: Optional[str] = None
