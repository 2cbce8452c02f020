"""Check item enums and the CheckItem pair."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class CheckItemKey(Enum):
    """The five components inspected on every check, in form order."""

    TYRES = "TYRES"
    BRAKES = "BRAKES"
    LIGHTS = "LIGHTS"
    OIL = "OIL"
    COOLANT = "COOLANT"


class CheckItemStatus(Enum):
    """Inspection outcome for a single component."""

    OK = "OK"
    FAIL = "FAIL"


@dataclass(frozen=True)
class CheckItem:
    """One (component, outcome) pair within a check."""

    key: CheckItemKey
    status: CheckItemStatus

    @property
    def failed(self) -> bool:
        return self.status is CheckItemStatus.FAIL

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key.value, "status": self.status.value}

    @classmethod
    def from_dict(cls, dct: Dict[str, Any]) -> "CheckItem":
        """Build from a wire/storage dict. Raises ValueError on unknown values."""
        return cls(CheckItemKey(dct["key"]), CheckItemStatus(dct["status"]))
