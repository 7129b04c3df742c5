"""
Ann Investment Portal - Admin Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Literal

_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


class AdminCreate(BaseModel):
    """Admin account creation request"""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)

    model_config = _CONFIG


class AdminResponse(BaseModel):
    """Admin profile"""
    id: int
    first_name: str
    last_name: str
    email: str
    role: Literal["admin"] = "admin"
    created_at: datetime

    model_config = _CONFIG


class AdminCreatedResponse(BaseModel):
    message: str
    admin_id: int

    model_config = _CONFIG
