"""
Pydantic schemas for Car.
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional


class CarCreate(BaseModel):
    """Schema for adding a car. ``make`` is accepted for ``company``."""
    company: str = Field(..., validation_alias=AliasChoices("company", "make"))
    model: str
    year: int
    price: float


class CarUpdate(BaseModel):
    """Schema for editing a car. Missing or falsy fields are left unchanged."""
    company: Optional[str] = Field(None, validation_alias=AliasChoices("company", "make"))
    model: Optional[str] = None
    year: Optional[int] = None
    price: Optional[float] = None


class Car(BaseModel):
    """Schema for car responses."""
    id: int
    company: str
    model: str
    year: int
    price: float

    model_config = ConfigDict(from_attributes=True)
