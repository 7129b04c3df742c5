# API module initialization
from .router import api_router
from .deps import get_current_claims, require_admin, get_db

__all__ = ["api_router", "get_current_claims", "require_admin", "get_db"]
