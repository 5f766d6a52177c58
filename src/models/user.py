"""
User-related Pydantic models
"""

from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


def _require_non_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be empty")
    return value


class UserCreateRequest(BaseModel):
    name: str
    email: str
    description: Optional[str] = None
    password: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return _require_non_blank(value)


class UserUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value):
        return _require_non_blank(value)

    def changes(self) -> dict:
        """Fields explicitly supplied by the client; only description may be cleared"""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key == "description"
        }


class UserResponse(BaseModel):
    """Public representation of a user; password is write-only"""
    id: UUID
    name: str
    email: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
