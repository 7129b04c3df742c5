# Schemas module initialization
from .user import (
    UserRegistration, UserProfileUpdate, AdminUserUpdate, UserResponse,
    LoginRequest, LoginResponse
)
from .admin import AdminCreate, AdminResponse
from .ledger import TransactionCreate, TransactionResponse

__all__ = [
    "UserRegistration", "UserProfileUpdate", "AdminUserUpdate", "UserResponse",
    "LoginRequest", "LoginResponse",
    "AdminCreate", "AdminResponse",
    "TransactionCreate", "TransactionResponse"
]
