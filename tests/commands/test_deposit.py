"""Tests for the deposit command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from settlectl.cli import cli


@pytest.mark.usefixtures("seeded_db")
class TestDepositCommand:
    def test_deposit_at_cap(self, cli_runner: CliRunner) -> None:
        # client 1 owes 401.00, so the cap is 100.25
        result = cli_runner.invoke(cli, ["--json", "deposit", "100.25", "-p", "1"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["old_balance"] == "1150.00"
        assert data["new_balance"] == "1250.25"
        assert data["total_unpaid"] == "401.00"

    def test_deposit_over_cap(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["deposit", "100.26", "-p", "1"])
        assert result.exit_code == 1
        assert "DEPOSIT_LIMIT_EXCEEDED" in result.output
        assert "cap: 100.25" in result.output

    def test_invalid_amount(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "deposit", "ten", "-p", "1"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_AMOUNT"

    def test_contractor_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "deposit", "1", "-p", "5"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "UNAUTHORIZED"

    def test_amount_beyond_decimal_precision(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "deposit", "1e30", "-p", "1"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_AMOUNT"
