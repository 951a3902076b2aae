"""Inbound payload schemas."""
from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["CustomRecordRequest"]


class CustomRecordRequest(BaseModel):
    """Body accepted by the custom record store."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(...)

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("data")
    @classmethod
    def _not_empty(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        if not value:
            raise ValueError("must not be empty")
        return value
