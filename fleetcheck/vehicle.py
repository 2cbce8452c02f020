"""Vehicle class for fleet identification."""

from typing import Any, Dict


class Vehicle:
    """A fleet vehicle that can be inspected. Read-only to this package."""

    def __init__(
        self,
        id: str,
        registration: str,
        make: str,
        model: str,
        year: int,
    ):
        self.id = id
        self.registration = registration
        self.make = make
        self.model = model
        self.year = year

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.make} {self.model} ({self.registration})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "registration": self.registration,
            "make": self.make,
            "model": self.model,
            "year": self.year,
        }

    @classmethod
    def from_dict(cls, dct: Dict[str, Any]) -> "Vehicle":
        return cls(
            dct["id"],
            dct["registration"],
            dct["make"],
            dct["model"],
            dct["year"],
        )
