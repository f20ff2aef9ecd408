"""
Persistence for users and cars.

Users are kept in process memory and are lost on restart. Cars live in a
single JSON file holding an array of records; nothing is cached between
requests, every operation re-reads the file.
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol

from car_api.exceptions import PersistenceError, ValidationError
from car_api.models.car import Car
from car_api.models.user import User

logger = logging.getLogger(__name__)


# ── Users ──────────────────────────────────────────────────────────────


class UserRepository(Protocol):
    def get_by_username(self, username: str) -> Optional[User]: ...

    def create(self, username: str, password_hash: str) -> User: ...


class InMemoryUserRepository:
    """Users held in a list for the lifetime of the process."""

    def __init__(self) -> None:
        self._users: List[User] = []
        self._lock = threading.Lock()

    def get_by_username(self, username: str) -> Optional[User]:
        for user in self._users:
            if user.username == username:
                return user
        return None

    def create(self, username: str, password_hash: str) -> User:
        """Append a user with id = count + 1. Raises ``ValidationError`` on a taken username."""
        with self._lock:
            if self.get_by_username(username) is not None:
                raise ValidationError("User already exists")
            user = User(id=len(self._users) + 1, username=username, password_hash=password_hash)
            self._users.append(user)
            return user

    def __len__(self) -> int:
        return len(self._users)


# ── Cars ───────────────────────────────────────────────────────────────


class CarStore(ABC):
    """
    Whole-collection car storage.

    ``load_all`` and ``save_all`` fail open by default: read errors yield an
    empty list and write errors are only logged. With ``fail_closed`` set
    both raise ``PersistenceError`` instead.
    """

    def __init__(self, fail_closed: bool = False) -> None:
        self.fail_closed = fail_closed
        self._lock = threading.Lock()
        self._last_id = 0

    @abstractmethod
    def _read(self) -> List[Dict[str, Any]]:
        """Return raw records; raise ``PersistenceError`` on failure."""

    @abstractmethod
    def _write(self, records: List[Dict[str, Any]]) -> None:
        """Replace all raw records; raise ``PersistenceError`` on failure."""

    def load_all(self) -> List[Car]:
        try:
            raw = self._read()
            try:
                return [Car.from_dict(item) for item in raw]
            except (KeyError, TypeError, ValueError) as exc:
                raise PersistenceError(f"Malformed car record: {exc!r}") from exc
        except PersistenceError as exc:
            if self.fail_closed:
                raise
            logger.warning("Error reading cars, treating store as empty: %s", exc.message)
            return []

    def save_all(self, cars: List[Car]) -> None:
        try:
            self._write([car.to_dict() for car in cars])
        except PersistenceError as exc:
            if self.fail_closed:
                raise
            logger.error("Error writing cars, change not persisted: %s", exc.message)

    def next_id(self, cars: List[Car]) -> int:
        """Monotonic id: never reuses an id handed out by this process or present in ``cars``."""
        highest = max((car.id for car in cars), default=0)
        self._last_id = max(self._last_id, highest) + 1
        return self._last_id

    @contextmanager
    def transaction(self) -> Iterator[List[Car]]:
        """
        Load, let the caller mutate, then save, all under the writer lock.

        If the block raises, nothing is written.
        """
        with self._lock:
            cars = self.load_all()
            yield cars
            self.save_all(cars)


class JsonFileCarStore(CarStore):
    """Cars persisted as a JSON array in ``path``."""

    def __init__(self, path: str | Path, fail_closed: bool = False) -> None:
        super().__init__(fail_closed=fail_closed)
        self.path = Path(path)

    def _read(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(data, list):
            raise PersistenceError(f"{self.path} does not hold a JSON array")
        return data

    def _write(self, records: List[Dict[str, Any]]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(records, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as exc:
            raise PersistenceError(f"Could not write {self.path}: {exc}") from exc


class InMemoryCarStore(CarStore):
    """Car store kept in memory, for tests and throwaway runs."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None, fail_closed: bool = False) -> None:
        super().__init__(fail_closed=fail_closed)
        self._records: List[Dict[str, Any]] = [dict(r) for r in records or []]

    def _read(self) -> List[Dict[str, Any]]:
        return [dict(r) for r in self._records]

    def _write(self, records: List[Dict[str, Any]]) -> None:
        self._records = [dict(r) for r in records]


def init_db(store: CarStore) -> None:
    """Create an empty cars file on first start."""
    if not isinstance(store, JsonFileCarStore):
        return
    if store.path.exists():
        logger.info("Using cars file %s", store.path)
        return
    logger.info("Creating cars file %s", store.path)
    store.save_all([])
