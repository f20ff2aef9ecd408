"""
Pydantic schemas for User and Authentication.
"""
from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Schema for register and login requests."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenClaims(BaseModel):
    """Identity carried inside a bearer token."""
    id: int
    username: str


class LoginResponse(BaseModel):
    """Schema for a successful login."""
    message: str
    token: str


class Message(BaseModel):
    message: str
