# Database module initialization
from .session import get_db, AsyncSessionLocal, init_db, close_db
from .base import Base

__all__ = ["get_db", "AsyncSessionLocal", "init_db", "close_db", "Base"]
