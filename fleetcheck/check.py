"""Check class - one immutable inspection record for a vehicle."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from dateutil.parser import isoparse

from .check_item import CheckItem


def format_utc(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a 'Z' suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def utc_now_iso() -> str:
    return format_utc(datetime.now(timezone.utc))


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a createdAt value into an aware datetime.

    Raises ValueError for unparseable or timezone-less values and TypeError
    for values that are neither strings nor datetimes.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        moment = isoparse(value)
    else:
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    if moment.tzinfo is None:
        raise ValueError(f"timestamp has no timezone: {value!r}")
    return moment


def new_check_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Check:
    """
    A persisted vehicle inspection.

    has_issue is not a field: it is always derived from items, so a Check
    can never disagree with its own item statuses. Use Check.create() to
    build a new record with a fresh id and timestamp.
    """

    id: str
    vehicle_id: str
    odometer_km: float
    items: Tuple[CheckItem, ...]
    created_at: str
    note: Optional[str] = None

    @property
    def has_issue(self) -> bool:
        """True if any item failed inspection."""
        return any(item.failed for item in self.items)

    @classmethod
    def create(
        cls,
        vehicle_id: str,
        odometer_km: float,
        items: Iterable[CheckItem],
        note: Optional[str] = None,
        check_id: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> "Check":
        """Build a new check, assigning id and timestamp when not given."""
        return cls(
            id=check_id or new_check_id(),
            vehicle_id=vehicle_id,
            odometer_km=odometer_km,
            items=tuple(items),
            created_at=created_at or utc_now_iso(),
            # An empty note means no note
            note=note or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire/storage format (camelCase, note omitted if absent)."""
        d: Dict[str, Any] = {
            "id": self.id,
            "vehicleId": self.vehicle_id,
            "odometerKm": self.odometer_km,
            "items": [item.to_dict() for item in self.items],
        }
        if self.note is not None:
            d["note"] = self.note
        d["hasIssue"] = self.has_issue
        d["createdAt"] = self.created_at
        return d

    @classmethod
    def from_dict(cls, dct: Dict[str, Any]) -> "Check":
        """
        Parse a stored record.

        Any stored hasIssue value is ignored; it is recomputed from items.
        Raises KeyError/ValueError/TypeError on malformed records,
        including a createdAt that is not an ISO-8601 time with a timezone.
        """
        created_at = dct["createdAt"]
        moment = parse_timestamp(created_at)
        # Unquoted timestamps in hand-edited YAML load as datetimes
        if isinstance(created_at, datetime):
            created_at = format_utc(moment)
        return cls(
            id=dct["id"],
            vehicle_id=dct["vehicleId"],
            odometer_km=dct["odometerKm"],
            items=tuple(CheckItem.from_dict(item) for item in dct["items"]),
            created_at=created_at,
            note=dct.get("note"),
        )
