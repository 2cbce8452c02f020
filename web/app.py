"""Flask JSON API for vehicle inspection checks."""

import os
import threading
from pathlib import Path
from typing import List, Optional, Union

from flask import Flask, jsonify, request

from fleetcheck import (
    CheckService,
    FieldError,
    StorageError,
    YamlCheckStore,
    YamlVehicleCatalog,
    parse_check_request,
)

# Path to data directory (relative to project root unless overridden)
DATA_DIR = Path(
    os.environ.get("FLEETCHECK_DATA_DIR", Path(__file__).parent.parent / "data")
)


def error_response(
    code: str,
    message: str,
    status: int,
    details: Optional[List[FieldError]] = None,
):
    """Build the standard error envelope."""
    body = {
        "error": {
            "code": code,
            "message": message,
            "details": [d.to_dict() for d in details or []],
        }
    }
    return jsonify(body), status


def create_app(data_dir: Optional[Union[str, Path]] = None) -> Flask:
    """Create the API app backed by vehicles.yaml and checks.yaml in data_dir."""
    data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

    app = Flask(__name__)
    app.json.sort_keys = False

    vehicles = YamlVehicleCatalog(data_dir / "vehicles.yaml")
    service = CheckService(YamlCheckStore(data_dir / "checks.yaml"))
    # Serializes read-modify-write cycles within this process
    write_lock = threading.Lock()

    app.extensions["fleetcheck"] = {"vehicles": vehicles, "service": service}

    @app.errorhandler(StorageError)
    def handle_storage_error(err):
        app.logger.exception("Storage failure: %s", err)
        return error_response(
            "INTERNAL_SERVER_ERROR", "An unexpected error occurred", 500
        )

    @app.errorhandler(500)
    def handle_internal_error(err):
        app.logger.error("Unhandled error: %s", getattr(err, "original_exception", err))
        return error_response(
            "INTERNAL_SERVER_ERROR", "An unexpected error occurred", 500
        )

    @app.route("/vehicles", methods=["GET"])
    def list_vehicles():
        """All fleet vehicles."""
        return jsonify([v.to_dict() for v in vehicles.read_vehicles()])

    @app.route("/checks", methods=["POST"])
    def create_check():
        """Validate the body and create a check."""
        payload = request.get_json(silent=True)
        result = parse_check_request(payload, vehicles.vehicle_exists)
        if not result.ok:
            return error_response(
                "VALIDATION_ERROR", "Invalid request body", 400, result.errors
            )

        with write_lock:
            check = service.create_check(result.data)
        return jsonify(check.to_dict()), 201

    @app.route("/checks", methods=["GET"])
    def list_checks():
        """Checks for one vehicle, newest first, optionally by hasIssue."""
        vehicle_id = request.args.get("vehicleId")
        if not vehicle_id:
            return error_response(
                "VALIDATION_ERROR",
                "Invalid request",
                400,
                [FieldError("vehicleId", "is required")],
            )

        has_issue = None
        if "hasIssue" in request.args:
            has_issue = request.args.get("hasIssue") == "true"

        checks = service.get_checks(vehicle_id, has_issue=has_issue)
        return jsonify([c.to_dict() for c in checks])

    @app.route("/checks/<check_id>", methods=["DELETE"])
    def delete_check(check_id: str):
        """Delete a check by id."""
        with write_lock:
            deleted = service.delete_check(check_id)
        if not deleted:
            return error_response("NOT_FOUND", "Check not found", 404)
        return "", 204

    return app


app = create_app()


if __name__ == "__main__":
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=int(os.environ.get("PORT", 5001)))
