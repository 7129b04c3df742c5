# Repositories module initialization
from .base import BaseRepository
from .user import UserRepository
from .admin import AdminRepository
from .ledger import LedgerRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "AdminRepository",
    "LedgerRepository"
]
