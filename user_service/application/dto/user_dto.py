# Standard library imports
from datetime import datetime
from typing import Any, Optional

# External package imports
from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

# Local application imports
from ...domain.models.user import User
from ...utils.datetime_utils import to_iso


class _UserFieldsRequest(BaseModel):
    """
    Raw user fields as sent by the client.

    Values are kept exactly as decoded from JSON; casting and type checks
    belong to the domain validator so the presence check always runs first.
    A body that is not a JSON object carries no fields.
    """
    name: Any = None
    email: Any = None
    age: Any = None
    address: Any = None

    @model_validator(mode="before")
    @classmethod
    def _object_body(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}


class UserCreateRequest(_UserFieldsRequest):
    """DTO for user creation request; unknown keys are dropped"""


class UserUpdateRequest(_UserFieldsRequest):
    """DTO for partial user update; only explicitly sent keys are applied"""

    def supplied_fields(self) -> dict:
        """Keys present in the request body, including explicit nulls"""
        return self.model_dump(exclude_unset=True)


class UserResponse(BaseModel):
    """DTO for user response"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    age: Optional[int] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return to_iso(value)

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id or "",
            name=user.name,
            email=user.email,
            age=user.age,
            address=user.address,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
