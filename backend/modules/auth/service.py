from typing import Optional
from uuid import UUID
import logging

from core.logging_config import get_logger
from core.security import PasswordHasher, TokenIssuer
from database.models.user import User
from modules.auth.store import UserStore
from schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from .exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidTokenError,
)

# Setup logger for this service
logger = logging.getLogger(__name__)
security_logger = get_logger("app.security")

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Authentication service: registration, login and bearer tokens"""

    def __init__(self, users: UserStore, hasher: PasswordHasher, tokens: TokenIssuer) -> None:
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def register(self, data: RegisterRequest) -> AuthResponse:
        """Register a new user and sign them in.

        The email check and the insert are two separate store calls.

        Raises:
            EmailAlreadyExistsError: The email is already registered. Nothing is written.
        """
        existing_user = await self._users.get_by_email(data.email)
        if existing_user:
            security_logger.warning(f"Registration failed: Email {data.email} already exists.")
            raise EmailAlreadyExistsError("Email already registered")

        hashed_password = self._hasher.hash(data.password)
        user = await self._users.add(email=data.email, hashed_password=hashed_password, name=data.name)

        security_logger.info(f"User {user.email} registered successfully with ID {user.id}")
        return self.build_auth_response(user)

    async def login(self, data: LoginRequest) -> AuthResponse:
        """Verify credentials and issue a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password; the two
                cases are indistinguishable to the caller.
        """
        user = await self._users.get_by_email(data.email)
        if not user:
            # Keep the timing close to a real hash comparison
            self._hasher.dummy_verify()
            security_logger.warning(f"Authentication failed: User not found for email {data.email}")
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        if not self._hasher.verify(data.password, user.hashed_password):
            security_logger.warning(f"Authentication failed: Invalid password for user {data.email}")
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        security_logger.info(f"Authentication successful for user: {data.email}")
        return self.build_auth_response(user)

    async def authenticate_token(self, token: str) -> User:
        """Resolve a bearer token to its user.

        Raises:
            TokenExpiredError: The token is past its expiry.
            InvalidTokenError: The token is invalid or its user no longer exists.
        """
        payload = self._tokens.decode(token)
        try:
            user_id = UUID(payload["sub"])
        except ValueError:
            logger.error(f"Invalid user_id format in token payload: {payload['sub']}")
            raise InvalidTokenError("Invalid user_id format in token")

        user: Optional[User] = await self._users.get(user_id)
        if user is None:
            logger.warning(f"User specified in token not found: {user_id}")
            raise InvalidTokenError("User from token not found")
        return user

    def build_auth_response(self, user: User) -> AuthResponse:
        """Token with {sub, email, name} claims plus the public user projection."""
        access_token = self._tokens.create_access_token(
            user.id,
            claims={"email": user.email, "name": user.name},
        )
        return AuthResponse(access_token=access_token, user=UserPublic.model_validate(user))
