"""
Pydantic models for user data.

``UserCreate`` is the request body of ``POST /users``; ``UserRead`` is
what both endpoints return.  The ``image`` field is never stored: it is
filled in by the service on every response.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class UserCreate(BaseModel):
    """Schema for registering a user.

    Only ``name`` is read, matched case‑insensitively (``"Name"`` and
    ``"NAME"`` count; the last matching key wins).  Unknown keys are
    ignored and a missing ``name`` becomes the empty string.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field("", examples=["alice"])

    @model_validator(mode="before")
    @classmethod
    def fold_name_key(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        matches = [key for key in data if isinstance(key, str) and key.lower() == "name"]
        if not matches:
            return data
        return {"name": data[matches[-1]]}


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: str = Field(..., examples=["65f1c2a9e4b0a1b2c3d4e5f6"])
    name: str = Field(..., examples=["alice"])
    image: str = Field("", examples=["https://example.com/avatar.png"])
