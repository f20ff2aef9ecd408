"""
Car record as stored in the cars file.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class Car:
    """Car storage model."""

    id: int
    company: str
    model: str
    year: int
    price: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Car":
        # Older files store the manufacturer under "make".
        company = data["company"] if "company" in data else data["make"]
        return cls(
            id=int(data["id"]),
            company=company,
            model=data["model"],
            year=data["year"],
            price=data["price"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
