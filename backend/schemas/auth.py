from datetime import datetime
from uuid import UUID
from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_serializer, field_validator

from schemas.event import as_utc


class RegisterRequest(BaseModel):
    """Schema to register users"""
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    """Schema for login credentials"""
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserPublic(BaseModel):
    """Public projection of a user; never carries the password hash"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID = Field(..., validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    email: str
    name: str
    created_at: datetime = Field(..., validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_serializer("id")
    def serialize_id(self, v: UUID, _info):
        return str(v)


class AuthResponse(BaseModel):
    """Bearer token plus the public user projection"""
    model_config = ConfigDict(populate_by_name=True)

    access_token: str
    user: UserPublic
