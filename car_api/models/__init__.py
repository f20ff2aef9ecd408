"""
Storage models.
"""
from car_api.models.car import Car
from car_api.models.user import User

__all__ = ["Car", "User"]
