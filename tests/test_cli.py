"""Tests for the marketlens CLI."""

import json

import pytest
from click.testing import CliRunner

from marketlens.cli import cli


def rising_candles() -> list[dict]:
    return [
        {"time": i * 60, "open": c - 1, "high": c, "low": c - 1, "close": c, "volume": 100}
        for i, c in enumerate(range(100, 121))
    ]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / "missing.toml")


def write_json(path, document):
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)


class TestAnalyze:
    def test_rich_output(self, runner, tmp_path, no_config):
        path = write_json(tmp_path / "btc.json", {"symbol": "BTC-USD", "candles": rising_candles()})

        result = runner.invoke(cli, ["analyze", path, "--config", no_config])

        assert result.exit_code == 0, result.output
        assert "Market Snapshot" in result.output
        assert "Bitcoin" in result.output
        assert "BULLISH" in result.output
        assert "Indicators" in result.output

    def test_json_output(self, runner, tmp_path, no_config):
        path = write_json(tmp_path / "eurusd.json", rising_candles())

        result = runner.invoke(cli, ["analyze", path, "--json", "--config", no_config])

        assert result.exit_code == 0, result.output
        doc = json.loads(result.output)
        assert doc["symbol"] == "EURUSD"
        assert doc["recommendation"]["sentiment"] == "bullish"
        assert doc["timeframe"] == {"interval": "30m", "range": "5d"}

    def test_symbol_option_wins(self, runner, tmp_path, no_config):
        path = write_json(tmp_path / "data.json", {"symbol": "AAPL", "candles": rising_candles()})

        result = runner.invoke(cli, ["analyze", path, "-s", "MSFT", "--json", "--config", no_config])

        doc = json.loads(result.output)
        assert doc["symbol"] == "MSFT"
        assert doc["displayName"] == "Microsoft"

    def test_preset_and_overrides(self, runner, tmp_path, no_config):
        path = write_json(tmp_path / "data.json", rising_candles())

        result = runner.invoke(
            cli, ["analyze", path, "-p", "1mo", "-r", "3mo", "--json", "--config", no_config]
        )

        doc = json.loads(result.output)
        assert doc["timeframe"] == {"interval": "90m", "range": "3mo"}

    def test_config_display_names(self, runner, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('[symbols]\n"BTC-USD" = "Digital Gold"\n', encoding="utf-8")
        path = write_json(tmp_path / "btc.json", {"symbol": "BTC-USD", "candles": rising_candles()})

        result = runner.invoke(cli, ["analyze", path, "--json", "--config", str(config)])

        assert json.loads(result.output)["displayName"] == "Digital Gold"

    def test_no_valid_candles(self, runner, tmp_path, no_config):
        path = write_json(tmp_path / "empty.json", [{"time": 0, "open": None, "close": None}])

        result = runner.invoke(cli, ["analyze", path, "--config", no_config])

        assert result.exit_code == 1
        assert "No Data" in result.output

    def test_bad_document(self, runner, tmp_path, no_config):
        path = write_json(tmp_path / "bad.json", {"prices": []})

        result = runner.invoke(cli, ["analyze", path, "--config", no_config])

        assert result.exit_code == 1
        assert "Data Error" in result.output

    def test_bad_config(self, runner, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text("max_candles = 0\n", encoding="utf-8")
        path = write_json(tmp_path / "data.json", rising_candles())

        result = runner.invoke(cli, ["analyze", path, "--config", str(config)])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output

    def test_missing_path(self, runner, tmp_path):
        result = runner.invoke(cli, ["analyze", str(tmp_path / "nope.json")])
        assert result.exit_code == 2


class TestCatalog:
    def test_markets(self, runner):
        result = runner.invoke(cli, ["markets"])

        assert result.exit_code == 0
        assert "AAPL" in result.output
        assert "BTC-USD" in result.output

    def test_markets_group_filter(self, runner):
        result = runner.invoke(cli, ["markets", "-g", "forex"])

        assert result.exit_code == 0
        assert "EURUSD=X" in result.output
        assert "AAPL" not in result.output

    def test_unknown_group(self, runner):
        result = runner.invoke(cli, ["markets", "-g", "bonds"])
        assert result.exit_code == 2

    def test_presets(self, runner):
        result = runner.invoke(cli, ["presets"])

        assert result.exit_code == 0
        assert "1mo" in result.output
        assert "90m" in result.output

    def test_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("analyze", "markets", "presets"):
            assert name in result.output
