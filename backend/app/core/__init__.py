# Core module initialization
from .config import settings
from .security import SecurityManager
from .exceptions import PortalException, AuthException, UpstreamFailure

__all__ = ["settings", "SecurityManager", "PortalException", "AuthException", "UpstreamFailure"]
