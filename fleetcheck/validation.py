"""
Request validation for check creation.

The validator takes an untrusted, loosely-typed payload (usually decoded
JSON) and reports every problem it finds as a FieldError. It never raises:
many simultaneous errors are an expected outcome, not an exceptional one.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from .check_item import CheckItem, CheckItemKey, CheckItemStatus

MAX_NOTE_LENGTH = 300
REQUIRED_ITEM_COUNT = len(CheckItemKey)

VALID_KEYS = [k.value for k in CheckItemKey]
VALID_STATUSES = [s.value for s in CheckItemStatus]


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "reason": self.reason}


@dataclass(frozen=True)
class CreateCheckData:
    """Validated input for CheckService.create_check."""

    vehicle_id: str
    odometer_km: float
    items: List[CheckItem]
    note: Optional[str] = None


@dataclass
class ValidationResult:
    """Either validated data (ok) or the list of errors found."""

    data: Optional[CreateCheckData] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _is_missing(value: Any) -> bool:
    """Absent or an empty scalar: None, "", 0 or False."""
    if value is None or value == "":
        return True
    return isinstance(value, (bool, int, float)) and not value


def _is_number(value: Any) -> bool:
    # bool is an int subclass but is not a reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _validate_vehicle_id(
    value: Any, vehicle_exists: Callable[[str], bool]
) -> List[FieldError]:
    if _is_missing(value):
        return [FieldError("vehicleId", "is required")]
    if not isinstance(value, str):
        return [FieldError("vehicleId", "must be a string")]
    if not vehicle_exists(value):
        return [FieldError("vehicleId", "vehicle does not exist")]
    return []


def _validate_odometer(value: Any) -> List[FieldError]:
    if value is None:
        return [FieldError("odometerKm", "is required")]
    if not _is_number(value):
        return [FieldError("odometerKm", "must be a number")]
    if value <= 0:
        return [FieldError("odometerKm", "must be > 0")]
    return []


def _validate_items(value: Any) -> List[FieldError]:
    if _is_missing(value):
        return [FieldError("items", "is required")]
    if not isinstance(value, list):
        return [FieldError("items", "must be an array")]

    errors = []
    if len(value) != REQUIRED_ITEM_COUNT:
        errors.append(
            FieldError("items", f"must contain exactly {REQUIRED_ITEM_COUNT} items")
        )

    seen_keys = set()
    for index, item in enumerate(value):
        if not isinstance(item, Mapping):
            item = {}

        key = item.get("key")
        if _is_missing(key):
            errors.append(FieldError(f"items[{index}].key", "is required"))
        elif key not in VALID_KEYS:
            errors.append(
                FieldError(
                    f"items[{index}].key",
                    f"must be one of: {', '.join(VALID_KEYS)}",
                )
            )
        else:
            seen_keys.add(key)

        status = item.get("status")
        if _is_missing(status):
            errors.append(FieldError(f"items[{index}].status", "is required"))
        elif status not in VALID_STATUSES:
            errors.append(
                FieldError(
                    f"items[{index}].status",
                    f"must be one of: {', '.join(VALID_STATUSES)}",
                )
            )

    if len(value) == REQUIRED_ITEM_COUNT and len(seen_keys) != REQUIRED_ITEM_COUNT:
        errors.append(
            FieldError(
                "items",
                f"must contain all {REQUIRED_ITEM_COUNT} keys exactly once (no duplicates)",
            )
        )

    for key in VALID_KEYS:
        if key not in seen_keys:
            errors.append(FieldError("items", f"missing required key: {key}"))

    return errors


def _validate_note(value: Any) -> List[FieldError]:
    if value is None:
        return []
    if not isinstance(value, str):
        return [FieldError("note", "must be a string")]
    if len(value) > MAX_NOTE_LENGTH:
        return [FieldError("note", f"must be <= {MAX_NOTE_LENGTH} characters")]
    return []


def validate_check_request(
    payload: Any, vehicle_exists: Callable[[str], bool]
) -> List[FieldError]:
    """
    Validate a check creation payload.

    Each field stops at its first problem, but every field is checked, so an
    empty payload yields one error per missing required field (plus the
    missing-key explanations for items). Returns an empty list on success.

    Args:
        payload: Untrusted request body. Anything that is not a mapping is
            treated as an empty payload.
        vehicle_exists: Lookup used to confirm the vehicleId.
    """
    if not isinstance(payload, Mapping):
        payload = {}

    errors = []
    errors.extend(_validate_vehicle_id(payload.get("vehicleId"), vehicle_exists))
    errors.extend(_validate_odometer(payload.get("odometerKm")))
    errors.extend(_validate_items(payload.get("items")))
    errors.extend(_validate_note(payload.get("note")))
    return errors


def parse_check_request(
    payload: Any, vehicle_exists: Callable[[str], bool]
) -> ValidationResult:
    """Validate a payload and, if clean, narrow it into CreateCheckData."""
    errors = validate_check_request(payload, vehicle_exists)
    if errors:
        return ValidationResult(errors=errors)

    data = CreateCheckData(
        vehicle_id=payload["vehicleId"],
        odometer_km=payload["odometerKm"],
        items=[CheckItem.from_dict(item) for item in payload["items"]],
        note=payload.get("note"),
    )
    return ValidationResult(data=data)
