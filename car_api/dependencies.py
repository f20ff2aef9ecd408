"""
FastAPI dependencies (shared across routes).

Settings and stores are bound to ``app.state`` by ``create_app`` so each
application instance, including the ones built in tests, has its own.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from car_api.auth import verify_access_token
from car_api.config import Settings
from car_api.database import CarStore, UserRepository
from car_api.schemas.user import TokenClaims

_bearer_scheme = HTTPBearer(
    bearerFormat="JWT",
    description="Enter JWT token in the format: Bearer <token>",
    auto_error=False,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.users


def get_car_store(request: Request) -> CarStore:
    return request.app.state.car_store


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> TokenClaims:
    """
    Verify the Bearer token and return its claims.

    The claims are also attached to ``request.state.user``.
    """
    token = credentials.credentials if credentials else None
    claims = verify_access_token(token, settings)
    request.state.user = claims
    return claims
