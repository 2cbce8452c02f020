"""CheckService - lifecycle of inspection check records."""

import logging
from typing import Callable, List, Optional

from .check import Check, new_check_id, parse_timestamp, utc_now_iso
from .store import CheckStore
from .validation import CreateCheckData

logger = logging.getLogger(__name__)


class CheckService:
    """
    Create, query and delete checks against an injected CheckStore.

    Mutations are read-modify-write over the whole collection. The service
    holds no lock: concurrent writers can lose updates unless the caller
    serializes them or the store provides transactional writes.
    """

    def __init__(
        self,
        store: CheckStore,
        now: Callable[[], str] = utc_now_iso,
        new_id: Callable[[], str] = new_check_id,
    ):
        self.store = store
        self._now = now
        self._new_id = new_id

    def create_check(self, data: CreateCheckData) -> Check:
        """
        Persist a new check built from already-validated data.

        StorageError from the store propagates; nothing is retried.
        """
        check = Check.create(
            vehicle_id=data.vehicle_id,
            odometer_km=data.odometer_km,
            items=data.items,
            note=data.note,
            check_id=self._new_id(),
            created_at=self._now(),
        )

        checks = self.store.read_checks()
        checks.append(check)
        self.store.write_checks(checks)

        logger.info(
            "Created check %s for vehicle %s (has_issue=%s)",
            check.id,
            check.vehicle_id,
            check.has_issue,
        )
        return check

    def get_checks(
        self, vehicle_id: str, has_issue: Optional[bool] = None
    ) -> List[Check]:
        """
        Get checks for a vehicle, newest first.

        Args:
            vehicle_id: Exact vehicle id to match
            has_issue: If given, keep only checks with this flag

        Checks with equal timestamps keep their store order.
        """
        checks = [c for c in self.store.read_checks() if c.vehicle_id == vehicle_id]
        if has_issue is not None:
            checks = [c for c in checks if c.has_issue == has_issue]
        return sorted(
            checks, key=lambda c: parse_timestamp(c.created_at), reverse=True
        )

    def get_check_by_id(self, check_id: str) -> Optional[Check]:
        """Find a check by its id."""
        for check in self.store.read_checks():
            if check.id == check_id:
                return check
        return None

    def delete_check(self, check_id: str) -> bool:
        """
        Remove a check by id.

        Returns False without writing when no check has that id.
        """
        checks = self.store.read_checks()
        remaining = [c for c in checks if c.id != check_id]
        if len(remaining) == len(checks):
            return False

        self.store.write_checks(remaining)
        logger.info("Deleted check %s", check_id)
        return True
