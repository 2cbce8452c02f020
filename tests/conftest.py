"""Shared fixtures for fleetcheck tests."""

from typing import List

import pytest

from fleetcheck import Check, CheckItemKey

VEHICLES_YAML = """
- id: VH001
  registration: ABC123
  make: Toyota
  model: Hilux
  year: 2022
- id: VH002
  registration: XYZ789
  make: Ford
  model: Ranger
  year: 2021
"""


class RecordingStore:
    """In-memory CheckStore that counts reads and writes."""

    def __init__(self, checks: List[Check] = None):
        self.checks = list(checks or [])
        self.reads = 0
        self.writes = 0

    def read_checks(self) -> List[Check]:
        self.reads += 1
        return list(self.checks)

    def write_checks(self, checks: List[Check]) -> None:
        self.writes += 1
        self.checks = list(checks)


def make_items(*failed: str) -> list:
    """Wire-format items with every key OK except the ones named."""
    return [
        {"key": key.value, "status": "FAIL" if key.value in failed else "OK"}
        for key in CheckItemKey
    ]


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with two vehicles and no checks."""
    (tmp_path / "vehicles.yaml").write_text(VEHICLES_YAML)
    return tmp_path


@pytest.fixture
def known_vehicles():
    """vehicle_exists callable that knows VH001 and VH002."""
    return lambda vehicle_id: vehicle_id in {"VH001", "VH002"}
