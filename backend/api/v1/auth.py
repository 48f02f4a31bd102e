from fastapi import APIRouter, Depends, HTTPException, status
import logging

from core.dependencies import get_auth_service, get_current_user
from database.models.user import User
from modules.auth.exceptions import EmailAlreadyExistsError, InvalidCredentialsError
from modules.auth.service import AuthService
from schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user and return an access token
    """
    try:
        return await auth_service.register(user_data)
    except EmailAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/login", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def login_for_access_token(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Exchange email and password for an access token
    """
    try:
        return await auth_service.login(credentials)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.get("/me", response_model=UserPublic)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Get current user information
    """
    return current_user
