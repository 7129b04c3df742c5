"""
Ann Investment Portal - API Dependencies
Dependency injection for endpoints
"""
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_db as get_db_session
from core.security import security_manager, TokenClaims
from core.exceptions import AuthException, ForbiddenError, raise_unauthorized
from services.media import MediaStorage, media_storage

# Security scheme; missing or non-bearer headers come through as None
security = HTTPBearer(auto_error=False)


async def get_db():
    """Database session dependency"""
    async for session in get_db_session():
        yield session


def get_media_storage() -> MediaStorage:
    """Media storage dependency (overridden in tests)"""
    return media_storage


def claims_from_credentials(credentials: Optional[HTTPAuthorizationCredentials]) -> TokenClaims:
    """
    Verify an exact 'Bearer <token>' credential and return its claims.
    Raises 401 for anything else.
    """
    if credentials is None:
        raise_unauthorized("Authorization header missing or malformed")

    token = credentials.credentials
    if credentials.scheme != "Bearer" or not token or " " in token:
        raise_unauthorized("Malformed authorization header")

    try:
        return security_manager.verify_access_token(token)
    except AuthException as e:
        raise_unauthorized(e.message)


BearerCredentials = Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]


async def get_current_claims(credentials: BearerCredentials) -> TokenClaims:
    """
    Validate the bearer token and return its claims.
    Use as dependency in protected endpoints.
    """
    return claims_from_credentials(credentials)


async def require_admin(
    claims: Annotated[TokenClaims, Depends(get_current_claims)]
) -> TokenClaims:
    """Ensure the token carries role=admin (missing role is non-admin)"""
    if not claims.is_admin:
        raise ForbiddenError()
    return claims


# Type aliases for cleaner endpoint signatures
CurrentClaims = Annotated[TokenClaims, Depends(get_current_claims)]
AdminClaims = Annotated[TokenClaims, Depends(require_admin)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
Media = Annotated[MediaStorage, Depends(get_media_storage)]
