"""
Ann Investment Portal - Security Module
JWT token management and password hashing
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError as PydanticValidationError

from .config import settings
from .exceptions import InvalidTokenError, TokenExpiredError

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class TokenClaims(BaseModel):
    """Verified JWT claims"""
    sub: str  # account id
    email: str
    role: Optional[str] = None  # absent role is treated as non-admin
    exp: datetime
    type: str = "access"

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class SecurityManager:
    """
    Handles all security operations:
    - Password hashing/verification
    - JWT token creation/validation
    """

    def __init__(self):
        # Use argon2id - modern, secure, no version issues
        self.pwd_context = CryptContext(
            schemes=["argon2"],
            deprecated="auto"
        )
        self.secret_key = settings.SECRET_KEY
        self.algorithm = settings.ALGORITHM
        self.access_token_expire = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    # Password Operations
    def hash_password(self, password: str) -> str:
        """Hash a password using argon2id"""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            # Unrecognised hash format
            return False

    # Token Operations
    def create_access_token(
        self,
        subject_id: str,
        email: str,
        role: Optional[str] = None,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a new access token carrying subject id, email and role"""
        expire = datetime.now(timezone.utc) + (expires_delta or self.access_token_expire)
        payload = {
            "sub": str(subject_id),
            "email": email,
            "exp": expire,
            "type": "access",
        }
        if role is not None:
            payload["role"] = role
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> TokenClaims:
        """Decode and validate a JWT token"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError:
            raise InvalidTokenError()

        try:
            return TokenClaims(**payload)
        except PydanticValidationError:
            raise InvalidTokenError("Malformed token claims")

    def verify_access_token(self, token: str) -> TokenClaims:
        """Verify access token and return its claims"""
        claims = self.decode_token(token)
        if claims.type != "access":
            raise InvalidTokenError()
        return claims


# Global security manager instance
security_manager = SecurityManager()
