"""
YAML-backed record store and vehicle catalog.

Both collaborators work on whole collections: a read returns every record
and a write replaces the whole file. There is no partial-record update and
no locking here; callers that mutate from several threads must serialize
around read_checks()/write_checks() themselves.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Protocol, Union

import yaml

from .check import Check
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The record store could not be read or written."""


class CheckStore(Protocol):
    """Full-collection persistence for checks."""

    def read_checks(self) -> List[Check]:
        ...

    def write_checks(self, checks: List[Check]) -> None:
        ...


class VehicleCatalog(Protocol):
    """Read-only lookup of fleet vehicles."""

    def read_vehicles(self) -> List[Vehicle]:
        ...

    def vehicle_exists(self, vehicle_id: str) -> bool:
        ...


def _load_yaml_list(path: Path) -> List[Any]:
    """Load a YAML file holding a top-level list. A missing file is empty."""
    if not path.exists():
        return []
    try:
        with open(path, "r") as fp:
            data = yaml.load(fp, Loader=yaml.SafeLoader)
    except (OSError, yaml.YAMLError) as err:
        logger.error("Error reading %s: %s", path, err)
        raise StorageError(f"Could not read {path}") from err

    if data is None:
        return []
    if not isinstance(data, list):
        logger.error("Expected a list at the top of %s", path)
        raise StorageError(f"Malformed data file {path}")
    return data


def _dump_yaml_list(path: Path, data: List[Any]) -> None:
    """Replace a YAML file with the given list via temp file + rename."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w") as fp:
                yaml.dump(
                    data,
                    fp,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=False,
                    width=120,
                )
            os.replace(tmp_name, path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except (OSError, yaml.YAMLError) as err:
        logger.error("Error writing %s: %s", path, err)
        raise StorageError(f"Could not write {path}") from err


class YamlCheckStore:
    """Stores every check as one list in a single YAML file."""

    def __init__(self, filename: Union[str, Path]):
        self.path = Path(filename)

    def read_checks(self) -> List[Check]:
        records = _load_yaml_list(self.path)
        try:
            return [Check.from_dict(record) for record in records]
        except (KeyError, ValueError, TypeError) as err:
            logger.error("Malformed check record in %s: %s", self.path, err)
            raise StorageError(f"Malformed check record in {self.path}") from err

    def write_checks(self, checks: List[Check]) -> None:
        _dump_yaml_list(self.path, [check.to_dict() for check in checks])
        logger.debug("Wrote %d checks to %s", len(checks), self.path)


class YamlVehicleCatalog:
    """Reads the fleet from a YAML list of vehicles."""

    def __init__(self, filename: Union[str, Path]):
        self.path = Path(filename)

    def read_vehicles(self) -> List[Vehicle]:
        records = _load_yaml_list(self.path)
        try:
            return [Vehicle.from_dict(record) for record in records]
        except (KeyError, TypeError) as err:
            logger.error("Malformed vehicle record in %s: %s", self.path, err)
            raise StorageError(f"Malformed vehicle record in {self.path}") from err

    def get_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        """Find a vehicle by id."""
        for vehicle in self.read_vehicles():
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    def vehicle_exists(self, vehicle_id: str) -> bool:
        return self.get_vehicle(vehicle_id) is not None
