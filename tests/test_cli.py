"""Tests for CLI commands."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from neofit.cli import app
from neofit.config import settings as settings_module
from neofit.config.settings import Settings
from neofit.db import connection
from neofit.db.connection import DatabaseConnection

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the CLI at a temporary database and default settings."""
    settings = Settings()
    settings.database.path = tmp_path / "neofit.db"
    monkeypatch.setattr(settings_module, "_settings", settings)
    monkeypatch.setattr(connection, "_db", DatabaseConnection(settings.database.path))
    yield


def invoke_json(args):
    result = runner.invoke(app, args + ["--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestMainCommands:
    """Tests for main CLI commands."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "fitness" in result.output.lower()

    def test_stats_defaults(self):
        data = invoke_json(["stats", "--activity", "sedentary"])["data"]
        assert data["bmr"] == pytest.approx(1748.75)
        assert data["tdee"] == pytest.approx(2098.5)
        assert data["bmi"] == pytest.approx(26.12)

    def test_stats_unknown_activity(self):
        result = runner.invoke(app, ["stats", "--activity", "bogus"])
        assert result.exit_code == 1

    def test_stats_table(self):
        result = runner.invoke(app, ["stats"])
        assert result.exit_code == 0
        assert "Body Metrics" in result.output

    def test_avatar(self):
        data = invoke_json(["avatar"])["data"]
        assert data["height"] == pytest.approx(1.0)

    def test_avatar_follows_weight_log(self):
        runner.invoke(app, ["weight", "add", "67.375", "--date", "2024-01-01"])
        assert invoke_json(["avatar"])["data"]["bmi"] == pytest.approx(22.0)
        assert invoke_json(["avatar", "--profile-weight"])["data"]["bmi"] == pytest.approx(26.12, abs=0.01)


class TestProfileCommands:
    def test_set_and_show(self):
        invoke_json(["profile", "set", "--age", "40", "--gender", "female"])
        data = invoke_json(["profile", "show"])["data"]
        assert data["age"] == 40
        assert data["gender"] == "female"
        assert data["height"] == 175.0

    def test_set_invalid_gender(self):
        result = runner.invoke(app, ["profile", "set", "--gender", "robot"])
        assert result.exit_code == 1

    def test_set_nothing(self):
        result = runner.invoke(app, ["profile", "set"])
        assert result.exit_code == 1


class TestWeightCommands:
    def test_latest_date_wins(self):
        invoke_json(["weight", "add", "78", "--date", "2024-02-01"])
        invoke_json(["weight", "add", "82", "--date", "2024-01-01"])

        assert invoke_json(["profile", "show"])["data"]["latest_weight"] == 78.0
        entries = invoke_json(["weight", "list"])["data"]["entries"]
        assert [e["date"] for e in entries] == ["2024-02-01", "2024-01-01"]

    def test_rejects_zero_weight(self):
        result = runner.invoke(app, ["weight", "add", "0"])
        assert result.exit_code == 1
        assert invoke_json(["weight", "list"])["data"]["entries"] == []

    def test_invalid_date(self):
        result = runner.invoke(app, ["weight", "add", "80", "--date", "yesterday"])
        assert result.exit_code != 0

    def test_delete(self):
        entry_id = invoke_json(["weight", "add", "78", "--date", "2024-02-01"])["data"]["id"]
        result = runner.invoke(app, ["weight", "delete", entry_id])
        assert result.exit_code == 0
        assert invoke_json(["weight", "list"])["data"]["entries"] == []

    def test_delete_json(self):
        invoke_json(["weight", "add", "82", "--date", "2024-01-01"])
        entry_id = invoke_json(["weight", "add", "78", "--date", "2024-02-01"])["data"]["id"]

        response = invoke_json(["weight", "delete", entry_id])
        assert response["command"] == "weight delete"
        assert response["data"] == {"deleted": True, "latest_weight": 82.0}

    def test_delete_unknown_id_json(self):
        data = invoke_json(["weight", "delete", "nope"])["data"]
        assert data == {"deleted": False, "latest_weight": 80.0}


class TestWorkoutCommands:
    def test_add_and_list(self):
        invoke_json(["workout", "add", "Running", "--duration", "30", "--calories", "300",
                     "--distance", "5"])
        workouts = invoke_json(["workout", "list"])["data"]["workouts"]
        assert len(workouts) == 1
        assert workouts[0]["distance"] == 5.0
        assert workouts[0]["source"] == "manual"

    def test_add_requires_duration(self):
        result = runner.invoke(app, ["workout", "add", "Running", "--calories", "300"])
        assert result.exit_code != 0

    def test_rejects_zero_duration(self):
        result = runner.invoke(app, ["workout", "add", "Running", "--duration", "0",
                                     "--calories", "300"])
        assert result.exit_code == 1

    def test_delete_json(self):
        workout_id = invoke_json(["workout", "add", "Running", "--duration", "30",
                                  "--calories", "300"])["data"]["id"]
        invoke_json(["workout", "add", "Yoga", "--duration", "45", "--calories", "120"])

        data = invoke_json(["workout", "delete", workout_id])["data"]
        assert data == {"deleted": True, "remaining": 1}
        assert invoke_json(["workout", "delete", workout_id])["data"]["deleted"] is False

    def test_import(self, tmp_path):
        path = tmp_path / "band.json"
        path.write_text(json.dumps([
            {"type": "Walking", "date": "2030-01-01T09:00:00", "duration": 40,
             "calories_burned": 180},
        ]))
        assert invoke_json(["workout", "import", str(path)])["data"]["imported"] == 1
        # Second import skips the same workout
        assert invoke_json(["workout", "import", str(path)])["data"]["imported"] == 0

    def test_import_missing_file(self, tmp_path):
        result = runner.invoke(app, ["workout", "import", str(tmp_path / "nope.json")])
        assert result.exit_code == 1


class TestDailyAndReports:
    def test_daily_log(self):
        data = invoke_json(["daily", "log", "--consumed", "2000", "--burned", "500",
                            "--date", "2024-03-01"])["data"]
        assert data["balance"] == 1500

    def test_report_json(self):
        runner.invoke(app, ["workout", "add", "Running", "--duration", "30", "--calories", "300"])
        result = runner.invoke(app, ["report", "--days", "7", "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["count"] == 1
        assert data["trend"] == "up"

    def test_report_unknown_format(self):
        result = runner.invoke(app, ["report", "--format", "xml"])
        assert result.exit_code == 1

    def test_report_invalid_days(self):
        result = runner.invoke(app, ["report", "--days", "0"])
        assert result.exit_code == 1

    def test_export_csv(self, tmp_path):
        runner.invoke(app, ["workout", "add", "Yoga", "--duration", "45", "--calories", "120",
                            "--date", "2024-03-03T18:00"])
        out = tmp_path / "workouts.csv"
        result = runner.invoke(app, ["export", "--output", str(out)])
        assert result.exit_code == 0, result.output
        lines = out.read_text().splitlines()
        assert lines[0].startswith("date,type")
        assert lines[1] == "2024-03-03,Yoga,45,120,,,manual"

    def test_export_json_inline(self):
        runner.invoke(app, ["workout", "add", "Yoga", "--duration", "45", "--calories", "120",
                            "--date", "2024-03-03T18:00"])
        response = invoke_json(["export"])
        assert response["command"] == "export"
        assert response["data"]["count"] == 1
        assert response["data"]["output"] is None
        assert response["data"]["csv"].splitlines()[1] == "2024-03-03,Yoga,45,120,,,manual"

    def test_export_json_to_file(self, tmp_path):
        out = tmp_path / "workouts.csv"
        data = invoke_json(["export", "--output", str(out)])["data"]
        assert data == {"count": 0, "output": str(out)}
        assert out.read_text().startswith("date,type")
