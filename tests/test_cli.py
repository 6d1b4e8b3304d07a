"""
Smoke tests for the Typer CLI using local JSON store data.
"""

import json

import pytest
from typer.testing import CliRunner

from storehours import __version__
from storehours.cli.app import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    times_file = tmp_path / "store_times.json"
    overrides_file = tmp_path / "store_overrides.json"
    times_file.write_text(
        json.dumps([
            {"id": "1", "day_of_week": 1, "is_open": True, "start_time": "09:00", "end_time": "17:00"},
            {"id": "2", "day_of_week": 2, "is_open": False, "start_time": "", "end_time": ""},
        ]),
        encoding="utf-8",
    )
    overrides_file.write_text(
        json.dumps([
            {"id": "o", "day": 11, "month": 8, "is_open": False, "start_time": "", "end_time": ""},
        ]),
        encoding="utf-8",
    )

    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "device_timezone: Europe/London\n"
        "data:\n"
        f"  store_times_file: {times_file}\n"
        f"  overrides_file: {overrides_file}\n",
        encoding="utf-8",
    )
    return str(config_path)


def test_day_in_store_time(config_file):
    result = runner.invoke(app, ["day", "2025-08-04", "--config", config_file, "--tz", "store"])

    assert result.exit_code == 0
    assert "9:00 AM - 5:00 PM" in result.output
    assert "New York" in result.output


def test_day_in_device_time(config_file):
    result = runner.invoke(app, ["day", "2025-08-04", "--config", config_file, "--tz", "device"])

    assert result.exit_code == 0
    assert "2:00 PM - 10:00 PM" in result.output
    assert "London" in result.output


def test_day_closed_by_override(config_file):
    result = runner.invoke(app, ["day", "2025-08-11", "--config", config_file])

    assert result.exit_code == 0
    assert "Closed" in result.output


def test_day_rejects_bad_date(config_file):
    result = runner.invoke(app, ["day", "not-a-date", "--config", config_file])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_slots_in_the_past(config_file):
    result = runner.invoke(app, ["slots", "breakfast", "2020-01-06", "--config", config_file])

    assert result.exit_code == 0
    assert "No available time slots" in result.output


def test_week(config_file):
    result = runner.invoke(app, ["week", "--config", config_file])

    assert result.exit_code == 0
    assert "Monday" in result.output
    assert "Tuesday" in result.output


def test_upcoming(config_file):
    result = runner.invoke(app, ["upcoming", "--start", "2025-08-03", "--days", "3", "--config", config_file])

    assert result.exit_code == 0
    assert "Aug 4" in result.output


def test_greeting(config_file):
    result = runner.invoke(app, ["greeting", "--config", config_file, "--tz", "device"])

    assert result.exit_code == 0
    assert "London" in result.output


def test_missing_config_file(tmp_path):
    result = runner.invoke(app, ["week", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_upcoming_keeps_window_around_selection(config_file):
    result = runner.invoke(
        app,
        ["upcoming", "--start", "2025-08-03", "--days", "3", "--select", "2025-08-04", "--config", config_file],
    )

    assert result.exit_code == 0
    assert "Aug 3" in result.output
    assert "> Mon" in result.output


def test_upcoming_moves_window_to_selection(config_file):
    result = runner.invoke(
        app,
        ["upcoming", "--start", "2025-08-03", "--days", "3", "--select", "2025-08-10", "--config", config_file],
    )

    assert result.exit_code == 0
    assert "Aug 10" in result.output
    assert "Aug 4" not in result.output


def test_upcoming_survives_open_day_without_times(tmp_path):
    times_file = tmp_path / "store_times.json"
    times_file.write_text(
        json.dumps([
            {"id": "1", "day_of_week": 1, "is_open": True, "start_time": "", "end_time": ""},
            {"id": "2", "day_of_week": 2, "is_open": True, "start_time": "09:00", "end_time": "17:00"},
        ]),
        encoding="utf-8",
    )
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"data:\n  store_times_file: {times_file}\n", encoding="utf-8")

    result = runner.invoke(
        app, ["upcoming", "--start", "2025-08-04", "--days", "2", "--config", str(config_path)]
    )

    assert result.exit_code == 0
    assert "Aug 5" in result.output
    assert "9:00 AM - 5:00 PM" in result.output


def test_month_from_date(config_file):
    result = runner.invoke(app, ["month", "2025-08", "--from", "2025-08-20", "--config", config_file])

    assert result.exit_code == 0
    assert "August 2025" in result.output
    assert "2025-08-20" in result.output
    assert "2025-08-31" in result.output
    assert "2025-08-19" not in result.output


def test_month_already_past(config_file):
    result = runner.invoke(app, ["month", "2025-08", "--from", "2025-09-01", "--config", config_file])

    assert result.exit_code == 0
    assert "No remaining dates in August 2025" in result.output


def test_month_rejects_bad_month(config_file):
    result = runner.invoke(app, ["month", "2025-13", "--config", config_file])

    assert result.exit_code == 1
    assert "Error" in result.output
