"""
Ann Investment Portal - Admin Console Endpoints
"""
import logging
from fastapi import APIRouter, Query

from api.deps import DbSession, AdminClaims, BearerCredentials, claims_from_credentials
from core.config import settings
from core.exceptions import AccountNotFoundError, ForbiddenError, raise_not_found
from core.security import security_manager
from db.repositories.admin import AdminRepository
from db.repositories.ledger import LedgerRepository
from db.repositories.user import UserRepository
from schemas.admin import AdminCreate, AdminCreatedResponse
from schemas.ledger import TransactionCreate
from schemas.user import (
    AdminUserUpdate, UserResponse, UserEnvelope, UserListResponse,
    UserMessageResponse, MessageResponse, VerifyResponse
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/create", response_model=AdminCreatedResponse)
async def create_admin(admin_data: AdminCreate, db: DbSession, credentials: BearerCredentials):
    """
    Create an admin account.
    Open unless ADMIN_CREATE_OPEN is false; then an admin token is
    required once the first admin exists. Any token sent to the open
    route is ignored.
    """
    admin_repo = AdminRepository(db)

    if not settings.ADMIN_CREATE_OPEN and await admin_repo.any_exists():
        if not claims_from_credentials(credentials).is_admin:
            raise ForbiddenError()

    admin = await admin_repo.create(
        first_name=admin_data.first_name,
        last_name=admin_data.last_name,
        email=admin_data.email,
        hashed_password=security_manager.hash_password(admin_data.password)
    )
    logger.info(f"Admin account {admin.id} ({admin.email}) created")

    return AdminCreatedResponse(message="Admin created successfully", admin_id=admin.id)


@router.get("/users", response_model=UserListResponse)
async def list_users(
    _: AdminClaims,
    db: DbSession,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000)
):
    """All users, newest first"""
    users = await UserRepository(db).get_all(skip=skip, limit=limit)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/user/{user_id}", response_model=UserEnvelope)
async def get_user(user_id: int, _: AdminClaims, db: DbSession):
    """Single user with ledger"""
    user = await UserRepository(db).get_by_id(user_id)
    if not user:
        raise AccountNotFoundError(user_id)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/user/{user_id}", response_model=UserMessageResponse)
async def update_user(user_id: int, user_update: AdminUserUpdate, claims: AdminClaims, db: DbSession):
    """Patch any user field (ledger fields are overwritten as given)"""
    update_data = user_update.model_dump(exclude_unset=True)

    if "password" in update_data:
        update_data["hashed_password"] = security_manager.hash_password(update_data.pop("password"))

    user = await UserRepository(db).update(user_id, **update_data)
    if not user:
        raise AccountNotFoundError(user_id)

    logger.info(f"Admin {claims.email} updated user {user_id}: {sorted(update_data)}")
    return UserMessageResponse(message="User updated successfully", user=UserResponse.model_validate(user))


@router.patch("/user/{user_id}/freeze", response_model=UserMessageResponse)
async def toggle_freeze(user_id: int, claims: AdminClaims, db: DbSession):
    """Toggle the frozen flag"""
    user = await UserRepository(db).toggle_frozen(user_id)
    if not user:
        raise AccountNotFoundError(user_id)

    state = "frozen" if user.frozen else "unfrozen"
    logger.info(f"Admin {claims.email} {state} user {user_id}")
    return UserMessageResponse(message=f"User {state}", user=UserResponse.model_validate(user))


@router.post("/user/{user_id}/transactions", response_model=UserMessageResponse)
async def add_transaction(user_id: int, transaction: TransactionCreate, claims: AdminClaims, db: DbSession):
    """Append a ledger transaction and update balance/totals"""
    user = await LedgerRepository(db).apply_transaction(user_id, transaction.kind, transaction.amount)
    logger.info(f"Admin {claims.email} recorded {transaction.kind} of {transaction.amount} for user {user_id}")
    return UserMessageResponse(message="Transaction added", user=UserResponse.model_validate(user))


@router.delete("/user/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: int, claims: AdminClaims, db: DbSession):
    """Delete a user and their ledger"""
    deleted = await UserRepository(db).delete(user_id)
    if not deleted:
        raise AccountNotFoundError(user_id)

    logger.info(f"Admin {claims.email} deleted user {user_id}")
    return MessageResponse(message="User deleted successfully")


@router.post("/verify/{user_id}", response_model=VerifyResponse)
async def legacy_verify_user(user_id: int, db: DbSession):
    """
    Legacy unauthenticated verify. Kept for existing clients;
    disabled (404) when LEGACY_VERIFY_ENABLED is false.
    """
    if not settings.LEGACY_VERIFY_ENABLED:
        raise_not_found("Endpoint")

    user = await UserRepository(db).mark_verified(user_id)
    if not user:
        raise AccountNotFoundError(user_id)

    logger.warning(f"User {user_id} verified through the unauthenticated legacy endpoint")
    return VerifyResponse(message="User verified", user_id=user.id)
