"""
Pydantic schemas for request/response validation.
"""
from car_api.schemas.car import CarCreate, CarUpdate, Car
from car_api.schemas.user import Credentials, TokenClaims, LoginResponse, Message

__all__ = [
    "CarCreate", "CarUpdate", "Car",
    "Credentials", "TokenClaims", "LoginResponse", "Message",
]
