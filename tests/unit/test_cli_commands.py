"""Unit tests for the CLI — Typer command registration and basic behavior."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from conftest import (
    CLOUDTRAIL,
    PIPELINE_CHANGE,
    STAGE_CHANGE,
    FakeCodePipelineClient,
    FakeEc2Client,
    client_factory,
    event_dict,
    sqs_record,
)
from pipeline_notifier import __version__
from pipeline_notifier.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_credentials(monkeypatch):
    """Keep every test offline: no Datadog key, no Slack webhook."""
    monkeypatch.delenv("PIPELINE_NOTIFIER_MONITORING_API_KEY", raising=False)
    monkeypatch.delenv("PIPELINE_NOTIFIER_CHAT_WEBHOOK_URL", raising=False)


@pytest.fixture
def batch_file(tmp_path: Path) -> Path:
    path = tmp_path / "batch.json"
    records = [
        sqs_record(event_dict(PIPELINE_CHANGE, state="FAILED"), "m-1"),
        sqs_record(event_dict(STAGE_CHANGE, stage="Deploy"), "m-2"),
        sqs_record(event_dict(CLOUDTRAIL), "m-3"),
    ]
    path.write_text(json.dumps({"Records": records}), encoding="utf-8")
    return path


class TestCliApp:
    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "forward" in result.output
        assert "poll" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestForwardCommand:
    def test_dry_run_prints_payloads(self, batch_file: Path):
        result = runner.invoke(app, ["forward", str(batch_file), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Datadog" in result.output
        assert "Slack" in result.output
        assert '"alert_type": "error"' in result.output
        assert "Batch Report" in result.output

    def test_accepts_bare_record_list(self, tmp_path: Path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps([sqs_record(event_dict())]), encoding="utf-8")

        result = runner.invoke(app, ["forward", str(path), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Datadog" in result.output

    def test_forward_without_sinks_sends_nothing(self, batch_file: Path):
        result = runner.invoke(app, ["forward", str(batch_file)])
        assert result.exit_code == 0, result.output
        assert "Batch Report" in result.output

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["forward", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["forward", str(tmp_path / "nope.json")])
        assert result.exit_code != 0


class TestPollCommand:
    @pytest.fixture(autouse=True)
    def _fake_aws(self, monkeypatch):
        clients = {
            "eu-west-1": FakeCodePipelineClient(
                pages={None: (["build"], None)}, states={"build": [["Failed"]]}
            )
        }
        factory = client_factory(FakeEc2Client(["eu-west-1"]), clients)
        monkeypatch.setattr(
            "pipeline_notifier.cli.commands.poll.boto3_client_factory",
            lambda timeout=10.0: factory,
        )

    def test_renders_table(self):
        result = runner.invoke(app, ["poll"])
        assert result.exit_code == 0, result.output
        assert "Pipeline Status" in result.output
        assert "build" in result.output
        assert "Failed" in result.output

    def test_json_output(self):
        result = runner.invoke(app, ["poll", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {"region": "eu-west-1", "pipeline": "build", "status": "Failed"}
        ]
