"""Tests for the report command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from settlectl.cli import cli

WINDOW = ["--start", "08-01-2020", "--end", "09-01-2020"]


@pytest.mark.usefixtures("seeded_db")
class TestBestProfession:
    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "report", "best-profession", *WINDOW])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["profession"] == "Programmer"
        assert data["paid_amount"] == "450.00"
        assert data["start"] == "2020-08-01"

    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["report", "best-profession", *WINDOW])
        assert result.exit_code == 0, result.output
        assert "Programmer" in result.output

    def test_reversed_window(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "report", "best-profession", "--start", "09-01-2020", "--end", "08-01-2020"],
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_RANGE"

    def test_bad_date_format(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["report", "best-profession", "--start", "2020-08-01", "--end", "09-01-2020"]
        )
        assert result.exit_code == 2
        assert "does not match date format" in result.output

    def test_empty_window(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "report", "best-profession", "--start", "01-01-2019", "--end", "01-02-2019"],
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NO_DATA"


@pytest.mark.usefixtures("seeded_db")
class TestBestClients:
    def test_default_limit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "report", "best-clients", *WINDOW])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["limit"] == 2
        ranked = [(i["id"], i["paid_amount"]) for i in data["items"]]
        assert ranked == [(2, "300.00"), (1, "171.00")]

    def test_limit_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "report", "best-clients", *WINDOW, "--limit", "1"]
        )
        assert json.loads(result.output)["data"]["count"] == 1

    def test_limit_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "settlectl.toml").write_text("[reports]\ndefault_limit = 1\n")
        result = cli_runner.invoke(cli, ["--json", "report", "best-clients", *WINDOW])
        assert json.loads(result.output)["data"]["limit"] == 1

    def test_date_format_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "settlectl.toml").write_text('[reports]\ndate_format = "%Y-%m-%d"\n')
        result = cli_runner.invoke(
            cli,
            ["--json", "report", "best-clients", "--start", "2020-08-01", "--end", "2020-09-01"],
        )
        assert result.exit_code == 0, result.output

    def test_zero_limit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "report", "best-clients", *WINDOW, "--limit", "0"]
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_LIMIT"

    def test_quiet_lists_ids(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "report", "best-clients", *WINDOW])
        assert result.output.split() == ["2", "1"]

    def test_limit_beyond_row_range(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["report", "best-clients", *WINDOW, "--limit", "9223372036854775808"]
        )
        assert result.exit_code == 2
