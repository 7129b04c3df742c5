"""
Ann Investment Portal - User Schemas
Pydantic models for user API requests/responses (camelCase on the wire)
"""
from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional, List, Union, Literal
from datetime import datetime

from .ledger import TransactionResponse
from .admin import AdminResponse

CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


class UserRegistration(BaseModel):
    """Form fields accepted by /api/register"""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    dob: str = Field(..., min_length=1)
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    password: str = Field(..., min_length=1)

    model_config = CAMEL_CONFIG


class UserProfileUpdate(BaseModel):
    """Fields a user may change on their own profile"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    dob: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)

    model_config = {**CAMEL_CONFIG, "extra": "ignore"}


class AdminUserUpdate(UserProfileUpdate):
    """Admin patch: any stored user field except id, createdAt and transactions"""
    email: Optional[EmailStr] = None
    id_front_url: Optional[str] = None
    id_back_url: Optional[str] = None
    selfie_url: Optional[str] = None
    verified: Optional[bool] = None
    frozen: Optional[bool] = None
    balance: Optional[float] = None
    total_deposit: Optional[float] = None
    total_withdrawal: Optional[float] = None
    total_investment: Optional[float] = None
    min_deposit: Optional[float] = None
    min_withdrawal: Optional[float] = None


class UserResponse(BaseModel):
    """User profile with ledger (never includes the password hash)"""
    id: int
    role: Literal["user"] = "user"
    first_name: str
    last_name: str
    email: str
    phone: str
    dob: str
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""

    id_front_url: str = ""
    id_back_url: str = ""
    selfie_url: str = ""

    verified: bool
    frozen: bool

    balance: float
    total_deposit: float
    total_withdrawal: float
    total_investment: float
    min_deposit: float
    min_withdrawal: float

    transactions: List[TransactionResponse] = []
    created_at: datetime

    model_config = CAMEL_CONFIG


AccountProfile = Annotated[Union[UserResponse, AdminResponse], Field(discriminator="role")]


class UserEnvelope(BaseModel):
    user: UserResponse


class UserMessageResponse(BaseModel):
    message: str
    user: UserResponse


class UserListResponse(BaseModel):
    users: List[UserResponse]


class RegisterResponse(BaseModel):
    message: str
    user_id: int

    model_config = CAMEL_CONFIG


class VerifyResponse(BaseModel):
    """Legacy verify endpoint response"""
    message: str
    user_id: int

    model_config = CAMEL_CONFIG


class MessageResponse(BaseModel):
    message: str


class LoginRequest(BaseModel):
    """Login request (users and admins)"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """JWT login response"""
    message: str
    token: str
    role: str
    user: AccountProfile


class ProfileResponse(BaseModel):
    """/api/me response; admins get their admin profile"""
    user: AccountProfile
