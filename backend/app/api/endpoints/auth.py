"""
Ann Investment Portal - Authentication & Profile Endpoints
"""
import logging
from typing import Annotated, Dict, Optional
from fastapi import APIRouter, File, Form, UploadFile
from pydantic import ValidationError as PydanticValidationError

from api.deps import DbSession, CurrentClaims, Media
from core.config import settings
from core.exceptions import (
    ValidationError, EmailAlreadyRegisteredError, InvalidCredentialsError,
    ForbiddenError, AccountNotFoundError, NotFoundError
)
from core.security import security_manager, ROLE_USER, ROLE_ADMIN
from db.repositories.admin import AdminRepository
from db.repositories.user import UserRepository
from schemas.admin import AdminResponse
from schemas.user import (
    UserRegistration, UserProfileUpdate, UserResponse, LoginRequest, LoginResponse,
    RegisterResponse, ProfileResponse, UserMessageResponse
)
from services.media import MediaStorage, make_logical_name

router = APIRouter()
logger = logging.getLogger(__name__)

# multipart field name -> user column
ARTIFACT_FIELDS = {
    "idFront": "id_front_url",
    "idBack": "id_back_url",
    "selfie": "selfie_url",
}

REQUIRED_FIELDS = ("firstName", "lastName", "email", "phone", "dob", "password")


async def _read_artifact(upload: Optional[UploadFile], field_name: str) -> Optional[bytes]:
    """Read one optional image part, enforcing type and size limits"""
    if upload is None or not upload.filename:
        return None

    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise ValidationError(f"{field_name} must be an image")

    limit = settings.MAX_UPLOAD_BYTES
    if upload.size is not None and upload.size > limit:
        raise ValidationError(f"{field_name} exceeds the maximum upload size")

    # Never buffer more than one byte past the limit
    data = await upload.read(limit + 1)
    if len(data) > limit:
        raise ValidationError(f"{field_name} exceeds the maximum upload size")
    if not data:
        return None
    return data


async def _upload_artifacts(media: MediaStorage, files: Dict[str, Optional[UploadFile]]) -> Dict[str, str]:
    """Upload each present artifact; absent ones map to an empty URL"""
    buffers = {name: await _read_artifact(upload, name) for name, upload in files.items()}

    urls = {}
    for field_name, column in ARTIFACT_FIELDS.items():
        buffer = buffers.get(field_name)
        if buffer is None:
            urls[column] = ""
            continue
        urls[column] = await media.upload(buffer, make_logical_name(field_name), settings.UPLOAD_FOLDER)
    return urls


@router.post("/register", response_model=RegisterResponse)
async def register(
    db: DbSession,
    media: Media,
    first_name: Annotated[Optional[str], Form(alias="firstName")] = None,
    last_name: Annotated[Optional[str], Form(alias="lastName")] = None,
    email: Annotated[Optional[str], Form()] = None,
    phone: Annotated[Optional[str], Form()] = None,
    dob: Annotated[Optional[str], Form()] = None,
    street: Annotated[str, Form()] = "",
    city: Annotated[str, Form()] = "",
    state: Annotated[str, Form()] = "",
    zip: Annotated[str, Form()] = "",
    password: Annotated[Optional[str], Form()] = None,
    id_front: Annotated[Optional[UploadFile], File(alias="idFront")] = None,
    id_back: Annotated[Optional[UploadFile], File(alias="idBack")] = None,
    selfie: Annotated[Optional[UploadFile], File()] = None,
):
    """
    Register a new user from multipart form data.
    Identity images (idFront, idBack, selfie) are optional.
    """
    form = {
        "firstName": first_name, "lastName": last_name, "email": email,
        "phone": phone, "dob": dob, "password": password,
        "street": street, "city": city, "state": state, "zip": zip,
    }
    if not all(form[name] for name in REQUIRED_FIELDS):
        raise ValidationError("Missing required fields")

    try:
        registration = UserRegistration.model_validate(form)
    except PydanticValidationError as e:
        raise ValidationError("Invalid registration data", details=e.errors(include_url=False))

    user_repo = UserRepository(db)

    # Early exit so a known duplicate never triggers uploads;
    # the unique constraint still decides on insert.
    if await user_repo.get_by_email(registration.email):
        raise EmailAlreadyRegisteredError(registration.email)

    urls = await _upload_artifacts(media, {"idFront": id_front, "idBack": id_back, "selfie": selfie})

    user = await user_repo.create(
        first_name=registration.first_name,
        last_name=registration.last_name,
        email=registration.email,
        phone=registration.phone,
        dob=registration.dob,
        street=registration.street,
        city=registration.city,
        state=registration.state,
        zip=registration.zip,
        hashed_password=security_manager.hash_password(registration.password),
        verified=False,
        **urls
    )
    logger.info(f"Registered user {user.id} ({user.email})")

    return RegisterResponse(
        message="Registration successful. Identity verification in progress.",
        user_id=user.id
    )


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, db: DbSession):
    """Login for users and admins; users are checked first"""
    user = await UserRepository(db).get_by_email(credentials.email)
    if user and security_manager.verify_password(credentials.password, user.hashed_password):
        token = security_manager.create_access_token(str(user.id), user.email, ROLE_USER)
        return LoginResponse(
            message="Login successful",
            token=token,
            role=ROLE_USER,
            user=UserResponse.model_validate(user)
        )

    admin = await AdminRepository(db).get_by_email(credentials.email)
    if admin and security_manager.verify_password(credentials.password, admin.hashed_password):
        token = security_manager.create_access_token(str(admin.id), admin.email, ROLE_ADMIN)
        return LoginResponse(
            message="Login successful",
            token=token,
            role=ROLE_ADMIN,
            user=AdminResponse.model_validate(admin)
        )

    raise InvalidCredentialsError()


@router.get("/me", response_model=ProfileResponse)
async def get_current_profile(claims: CurrentClaims, db: DbSession):
    """Current account profile; for users this includes the ledger"""
    if claims.is_admin:
        admin = await AdminRepository(db).get_by_id(int(claims.sub))
        if not admin:
            raise NotFoundError("Admin")
        return ProfileResponse(user=AdminResponse.model_validate(admin))

    user = await UserRepository(db).get_by_id(int(claims.sub))
    if not user:
        raise AccountNotFoundError(claims.sub)
    return ProfileResponse(user=UserResponse.model_validate(user))


@router.put("/update-profile", response_model=UserMessageResponse)
async def update_profile(profile: UserProfileUpdate, claims: CurrentClaims, db: DbSession):
    """Update the caller's own profile fields"""
    if claims.is_admin:
        raise ForbiddenError("Profile updates are only available to user accounts")

    update_data = profile.model_dump(exclude_unset=True)

    # Hash password if provided
    if "password" in update_data:
        update_data["hashed_password"] = security_manager.hash_password(update_data.pop("password"))

    user = await UserRepository(db).update(int(claims.sub), **update_data)
    if not user:
        raise AccountNotFoundError(claims.sub)

    return UserMessageResponse(
        message="Profile updated successfully",
        user=UserResponse.model_validate(user)
    )
