"""
Fleet vehicle inspection checks.

This package provides the inspection-check domain:
- CheckItemKey / CheckItemStatus: The five inspected components and outcomes
- CheckItem: One (component, outcome) pair
- Check: Immutable inspection record with derived has_issue
- Vehicle: Fleet vehicle identification
- validate_check_request / parse_check_request: Request validation
- CheckService: Create, query and delete checks
- YamlCheckStore / YamlVehicleCatalog: YAML file persistence
"""

from .check_item import CheckItemKey, CheckItemStatus, CheckItem
from .check import Check, utc_now_iso
from .vehicle import Vehicle
from .validation import (
    FieldError,
    CreateCheckData,
    ValidationResult,
    validate_check_request,
    parse_check_request,
)
from .store import (
    StorageError,
    CheckStore,
    VehicleCatalog,
    YamlCheckStore,
    YamlVehicleCatalog,
)
from .check_service import CheckService

__all__ = [
    "CheckItemKey",
    "CheckItemStatus",
    "CheckItem",
    "Check",
    "utc_now_iso",
    "Vehicle",
    "FieldError",
    "CreateCheckData",
    "ValidationResult",
    "validate_check_request",
    "parse_check_request",
    "StorageError",
    "CheckStore",
    "VehicleCatalog",
    "YamlCheckStore",
    "YamlVehicleCatalog",
    "CheckService",
]
