#!/usr/bin/env python3
"""Tests for the checks CLI: formatting helpers and commands."""

import pytest

from conftest import make_items
from checks import (
    build_payload,
    format_issue,
    format_km,
    item_statuses,
    main,
    make_history_table,
    make_vehicle_table,
    parse_fail_keys,
    truncate,
)
from fleetcheck import Check, CheckItem, Vehicle, YamlCheckStore


def sample_check(failed=(), note=None, check_id="CHK001"):
    return Check.create(
        "VH001",
        15420,
        [CheckItem.from_dict(i) for i in make_items(*failed)],
        note=note,
        check_id=check_id,
        created_at="2026-01-20T08:30:00.000Z",
    )


# =============================================================================
# Formatting helpers
# =============================================================================


class TestFormatKm:
    """Tests for format_km."""

    def test_formats_number(self):
        assert format_km(15420) == "15,420 km"

    def test_none_returns_dash(self):
        assert format_km(None) == "-"


class TestFormatIssue:
    """Tests for format_issue."""

    def test_issue(self):
        assert format_issue(sample_check(failed=("OIL",))) == "ISSUE"

    def test_ok(self):
        assert format_issue(sample_check()) == "ok"


class TestTruncate:
    """Tests for truncate."""

    def test_none_returns_dash(self):
        assert truncate(None) == "-"

    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_truncated_with_ellipsis(self):
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestTables:
    """Tests for table row builders."""

    def test_item_statuses_in_key_order(self):
        check = sample_check(failed=("LIGHTS",))
        assert item_statuses(check) == ["OK", "OK", "FAIL", "OK", "OK"]

    def test_history_row(self):
        rows = make_history_table([sample_check(failed=("BRAKES",), note="Pads worn")])
        assert rows == [
            [
                "2026-01-20T08:30:00.000Z",
                "15,420 km",
                "OK",
                "FAIL",
                "OK",
                "OK",
                "OK",
                "ISSUE",
                "Pads worn",
            ]
        ]

    def test_vehicle_row(self):
        rows = make_vehicle_table([Vehicle("VH001", "ABC123", "Toyota", "Hilux", 2022)])
        assert rows == [["VH001", "ABC123", "Toyota", "Hilux", "2022"]]


class TestPayloadHelpers:
    """Tests for parse_fail_keys and build_payload."""

    def test_parse_fail_keys(self):
        assert parse_fail_keys("brakes, Lights") == ["BRAKES", "LIGHTS"]
        assert parse_fail_keys(None) == []
        assert parse_fail_keys("") == []

    def test_build_payload(self):
        payload = build_payload("VH001", 15000, ["BRAKES"], note="fine")
        assert payload == {
            "vehicleId": "VH001",
            "odometerKm": 15000,
            "items": make_items("BRAKES"),
            "note": "fine",
        }

    def test_build_payload_without_note(self):
        assert "note" not in build_payload("VH001", 15000, [])


# =============================================================================
# Commands
# =============================================================================


class TestCommands:
    """End-to-end command tests against a temp data directory."""

    def run(self, data_dir, *argv):
        return main(["--data-dir", str(data_dir), *argv])

    def test_vehicles(self, data_dir, capsys):
        assert self.run(data_dir, "vehicles") == 0
        out = capsys.readouterr().out
        assert "VH001" in out
        assert "Ranger" in out

    def test_log_then_history(self, data_dir, capsys):
        assert self.run(data_dir, "log", "VH001", "15000", "--fail", "brakes") == 0
        checks = YamlCheckStore(data_dir / "checks.yaml").read_checks()
        assert len(checks) == 1
        assert checks[0].has_issue is True

        capsys.readouterr()
        assert self.run(data_dir, "history", "VH001", "--issues") == 0
        out = capsys.readouterr().out
        assert "ISSUE" in out
        assert "Checks: 1" in out

    def test_log_dry_run_saves_nothing(self, data_dir):
        assert self.run(data_dir, "log", "VH001", "15000", "--dry-run") == 0
        assert not (data_dir / "checks.yaml").exists()

    def test_log_unknown_vehicle(self, data_dir, capsys):
        assert self.run(data_dir, "log", "DOES_NOT_EXIST", "15000") == 1
        assert "vehicle does not exist" in capsys.readouterr().out
        assert not (data_dir / "checks.yaml").exists()

    def test_log_invalid_odometer(self, data_dir, capsys):
        assert self.run(data_dir, "log", "VH001", "0") == 1
        assert "odometerKm: must be > 0" in capsys.readouterr().out

    def test_log_unknown_fail_item(self, data_dir, capsys):
        assert self.run(data_dir, "log", "VH001", "15000", "--fail", "wipers") == 1
        assert "WIPERS" in capsys.readouterr().out

    def test_history_unknown_vehicle(self, data_dir):
        assert self.run(data_dir, "history", "VH999") == 1

    def test_history_empty(self, data_dir, capsys):
        assert self.run(data_dir, "history", "VH002") == 0
        assert "No checks found." in capsys.readouterr().out

    def test_show_and_delete(self, data_dir, capsys):
        YamlCheckStore(data_dir / "checks.yaml").write_checks([sample_check(note="fine")])

        assert self.run(data_dir, "show", "CHK001") == 0
        assert "fine" in capsys.readouterr().out

        assert self.run(data_dir, "delete", "CHK001") == 0
        assert YamlCheckStore(data_dir / "checks.yaml").read_checks() == []

        assert self.run(data_dir, "delete", "CHK001") == 1
        assert self.run(data_dir, "show", "CHK001") == 1

    def test_delete_dry_run_keeps_check(self, data_dir):
        YamlCheckStore(data_dir / "checks.yaml").write_checks([sample_check()])
        assert self.run(data_dir, "delete", "CHK001", "--dry-run") == 0
        assert len(YamlCheckStore(data_dir / "checks.yaml").read_checks()) == 1

    def test_issue_flags_are_exclusive(self, data_dir):
        with pytest.raises(SystemExit):
            self.run(data_dir, "history", "VH001", "--issues", "--no-issues")
