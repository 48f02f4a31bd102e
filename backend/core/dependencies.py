# backend/core/dependencies.py
import logging
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.security import PasswordHasher, TokenIssuer
from database.models.user import User
from database.session import get_db
from modules.auth.exceptions import AuthError
from modules.auth.service import AuthService
from modules.auth.store import SqlAlchemyUserStore
from modules.events.service import EventService
from modules.events.store import SqlAlchemyEventStore

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login", auto_error=False)

# --- Stateless collaborators, shared across requests ---

@lru_cache(maxsize=None)
def get_password_hasher() -> PasswordHasher:
    """Creates and returns a singleton PasswordHasher instance."""
    logger.info(f"Initializing PasswordHasher with bcrypt cost {settings.BCRYPT_ROUNDS}")
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

@lru_cache(maxsize=None)
def get_token_issuer() -> TokenIssuer:
    """Creates and returns a singleton TokenIssuer instance."""
    logger.info("Initializing TokenIssuer")
    return TokenIssuer()

# --- Per-request services, built on the request's session ---

def get_event_service(db: AsyncSession = Depends(get_db)) -> EventService:
    return EventService(SqlAlchemyEventStore(db))

def get_auth_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(SqlAlchemyUserStore(db), hasher, tokens)

# --- Security & Auth Dependencies ---

async def get_current_user(
    token: str = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency to get the current user from the bearer token

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired or
            points to a user that no longer exists
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        logger.debug("Request without bearer token")
        raise credentials_exception
    try:
        user = await auth_service.authenticate_token(token)
    except AuthError as e:
        logger.warning(f"Bearer token rejected: {e}")
        raise credentials_exception
    logger.debug(f"User {user.email} (ID: {user.id}) authenticated successfully")
    return user
