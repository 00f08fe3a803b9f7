from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

TEXT_REQUIRED = "Text is required"


def _clean_text(value: Optional[str]) -> str:
    """Strip surrounding whitespace and reject blank text."""
    if value is None:
        raise ValueError(TEXT_REQUIRED)
    s = value.strip()
    if not s:
        raise ValueError(TEXT_REQUIRED)
    return s


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# PUBLIC_INTERFACE
class TodoCreate(_CamelModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"text": "Buy groceries"}},
    )

    text: Optional[str] = Field(
        default=None, validate_default=True, description="Content of the todo item"
    )
    completed: bool = Field(default=False, description="Completion status flag")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: Optional[str]) -> str:
        """
        Strip whitespace; missing, empty or whitespace-only text is rejected.
        """
        return _clean_text(v)


# PUBLIC_INTERFACE
class TodoUpdate(_CamelModel):
    """
    Schema for updating an existing Todo item.
    All fields are optional; only provided fields will be updated.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"completed": True}},
    )

    text: Optional[str] = Field(default=None, description="Content of the todo item")
    completed: Optional[bool] = Field(default=None, description="Completion status flag")

    @field_validator("text", mode="before")
    @classmethod
    def validate_text(cls, v):
        """
        If text is sent it must be non-blank; an explicit null is rejected.
        """
        if v is None or isinstance(v, str):
            return _clean_text(v)
        return v

    @field_validator("completed", mode="before")
    @classmethod
    def reject_null_completed(cls, v):
        if v is None:
            raise ValueError("completed must be a boolean")
        return v

    def changes(self) -> dict:
        """Return only the fields the client actually sent."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


# PUBLIC_INTERFACE
class TodoOut(_CamelModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "text": "Buy groceries",
                "completed": False,
                "createdAt": "2025-01-25T10:15:30.123456+00:00",
                "updatedAt": "2025-01-26T09:00:00.000001+00:00",
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Content of the todo item")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @field_serializer("created_at", "updated_at", when_used="json")
    def serialize_utc(self, value: datetime) -> str:
        """Stored timestamps are naive UTC; send them with an explicit offset."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()


class HealthOut(BaseModel):
    status: str = Field(..., description="Always 'ok' while the worker is serving")
    timestamp: datetime = Field(..., description="Server time of the check")


class MessageOut(BaseModel):
    message: str
