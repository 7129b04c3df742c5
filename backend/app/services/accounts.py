"""
Ann Investment Portal - Account bootstrap
"""
import logging
from typing import Optional

from pydantic import validate_email
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.security import security_manager
from db.repositories.admin import AdminRepository
from models.admin import Admin

logger = logging.getLogger(__name__)


async def seed_legacy_admin(session: AsyncSession) -> Optional[Admin]:
    """
    Create an admin account for ADMIN_EMAIL / ADMIN_PASSWORD if both are
    set and no admin with that email exists yet. Returns the new admin.
    The address is normalised the same way login normalises EmailStr.
    """
    if not (settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        return None

    email = validate_email(settings.ADMIN_EMAIL.strip())[1]

    admin_repo = AdminRepository(session)
    if await admin_repo.get_by_email(email):
        return None

    admin = await admin_repo.create(
        first_name="Portal",
        last_name="Admin",
        email=email,
        hashed_password=security_manager.hash_password(settings.ADMIN_PASSWORD)
    )
    logger.info(f"Seeded admin account {email}")
    return admin
