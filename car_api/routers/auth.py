"""
Auth routes: register, login.
"""
import logging

from fastapi import APIRouter, Depends, status

from car_api.auth import authenticate_user, create_access_token, register_user
from car_api.config import Settings
from car_api.database import UserRepository
from car_api.dependencies import get_app_settings, get_user_repository
from car_api.schemas.user import Credentials, LoginResponse, Message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Message, status_code=status.HTTP_201_CREATED)
def register(
    credentials: Credentials,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    """
    Register a new user. No token is returned; log in afterwards.
    """
    register_user(credentials.username, credentials.password, users, rounds=settings.bcrypt_rounds)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: Credentials,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    """
    Exchange username and password for a bearer token.
    """
    user = authenticate_user(credentials.username, credentials.password, users)
    token = create_access_token(user.id, user.username, settings)
    logger.info("Login: %s (id=%d)", user.username, user.id)
    return {"message": "Login successful", "token": token}
