"""
Ann Investment Portal - User Verification Endpoint
"""
import logging
from fastapi import APIRouter

from api.deps import DbSession, AdminClaims
from core.exceptions import AccountNotFoundError
from db.repositories.user import UserRepository
from schemas.user import UserResponse, UserMessageResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.patch("/{user_id}/verify", response_model=UserMessageResponse)
async def verify_user(user_id: int, claims: AdminClaims, db: DbSession):
    """Mark a user's identity as verified"""
    user = await UserRepository(db).mark_verified(user_id)
    if not user:
        raise AccountNotFoundError(user_id)

    logger.info(f"Admin {claims.email} verified user {user_id}")
    return UserMessageResponse(message="User verified successfully", user=UserResponse.model_validate(user))
