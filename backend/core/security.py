from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from core.config import settings
from modules.auth.exceptions import InvalidTokenError, TokenExpiredError


class PasswordHasher:
    """Salted bcrypt hashing through a passlib context."""

    def __init__(self, rounds: int = settings.BCRYPT_ROUNDS):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """
        Generate a password hash using bcrypt

        Args:
            password: The plain text password to hash

        Returns:
            str: Hashed password, salt included
        """
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify if a plain password matches the hashed version

        Args:
            plain_password: The plain text password to verify
            hashed_password: The hashed password to compare against

        Returns:
            bool: True if password matches, False otherwise
        """
        return self._context.verify(plain_password, hashed_password)

    def dummy_verify(self) -> bool:
        """Spend the same time as a real verify when there is no stored hash."""
        return self._context.dummy_verify()


class TokenIssuer:
    """Signs and verifies HS256 access tokens."""

    def __init__(
        self,
        secret_key: str = settings.SECRET_KEY,
        algorithm: str = settings.JWT_ALGORITHM,
        expires_delta: Optional[timedelta] = None,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def create_access_token(self, subject: Any, claims: Optional[Dict[str, Any]] = None) -> str:
        """
        Create a JWT access token

        Args:
            subject: The subject to encode in the token (the user ID)
            claims: Extra public claims, e.g. email and name

        Returns:
            str: Encoded JWT token
        """
        expire = datetime.now(timezone.utc) + self._expires_delta
        to_encode = dict(claims or {})
        to_encode.update({"exp": expire, "sub": str(subject)})
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry and return the token payload.

        Raises:
            TokenExpiredError: The token is past its expiry.
            InvalidTokenError: Bad signature, malformed token or missing subject.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        if not payload.get("sub"):
            raise InvalidTokenError("Invalid token payload (no subject)")
        return payload
