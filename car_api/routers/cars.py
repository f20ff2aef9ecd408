"""
Car routes.

Handlers are plain functions so the blocking file access runs in the
threadpool. Mutations go through ``CarStore.transaction``, which holds the
store's writer lock across the read-modify-write cycle.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from car_api.database import CarStore
from car_api.dependencies import get_car_store, get_current_user
from car_api.exceptions import NotFoundError
from car_api.models.car import Car
from car_api.schemas.car import Car as CarSchema, CarCreate, CarUpdate
from car_api.schemas.user import Message, TokenClaims

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cars", tags=["cars"])


def _find(cars: List[Car], car_id: int) -> Car:
    for car in cars:
        if car.id == car_id:
            return car
    raise NotFoundError("Car not found")


@router.get("", response_model=List[CarSchema])
def get_cars(
    store: CarStore = Depends(get_car_store),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Get all cars.
    """
    return store.load_all()


@router.get("/{car_id}", response_model=CarSchema)
def get_car(
    car_id: int,
    store: CarStore = Depends(get_car_store),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Get a specific car by ID.
    """
    return _find(store.load_all(), car_id)


@router.post("/add-car", response_model=CarSchema, status_code=status.HTTP_201_CREATED)
def add_car(
    car_in: CarCreate,
    store: CarStore = Depends(get_car_store),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Add a new car.
    """
    with store.transaction() as cars:
        car = Car(id=store.next_id(cars), **car_in.model_dump())
        cars.append(car)

    logger.info("%s added car %d (%s %s)", current_user.username, car.id, car.company, car.model)
    return car


@router.put("/edit-car/{car_id}", response_model=CarSchema)
def edit_car(
    car_id: int,
    car_update: CarUpdate,
    store: CarStore = Depends(get_car_store),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Update a car.

    Only truthy fields overwrite the stored value, so a field sent as 0 or
    an empty string keeps its previous value.
    """
    with store.transaction() as cars:
        car = _find(cars, car_id)
        for field, value in car_update.model_dump(exclude_unset=True).items():
            if value:
                setattr(car, field, value)

    logger.info("%s edited car %d", current_user.username, car.id)
    return car


@router.delete("/delete-car/{car_id}", response_model=Message)
def delete_car(
    car_id: int,
    store: CarStore = Depends(get_car_store),
    current_user: TokenClaims = Depends(get_current_user),
):
    """
    Delete a car.
    """
    with store.transaction() as cars:
        index = next((i for i, car in enumerate(cars) if car.id == car_id), None)
        if index is None:
            raise NotFoundError(f"Car with id {car_id} not found")
        del cars[index]

    logger.info("%s deleted car %d", current_user.username, car_id)
    return {"message": "Car deleted successfully"}
