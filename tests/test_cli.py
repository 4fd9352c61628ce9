"""Tests for fightdata.cli."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from fightdata.cli import main
from fightdata.models import FightRecord
from fightdata.util import UnexpectedStatusError


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "server:\n  port: '9001'\nparser:\n  base_url: https://example.com/results/\n",
        encoding="utf-8",
    )
    return path


class TestScrapeCommand:
    @patch("fightdata.cli.FightParser")
    def test_prints_json(
        self, mock_parser: MagicMock, config_path: Path, capsys: pytest.CaptureFixture,
    ) -> None:
        mock_parser.return_value.parse_fights.return_value = [FightRecord(
            id="fight_1_1", date="2024-10-15", fighter1="Иван", fighter2="B",
            result="KO", location="X", parsed_at="2024-10-20T10:00:00+00:00",
        )]

        main(["--config", str(config_path), "scrape"])

        out = json.loads(capsys.readouterr().out)
        assert out[0]["fighter1"] == "Иван"
        assert mock_parser.call_args.args[0] == "https://example.com/results/"

    @patch("fightdata.cli.FightParser")
    def test_url_override(self, mock_parser: MagicMock, config_path: Path) -> None:
        mock_parser.return_value.parse_fights.return_value = []
        main(["--config", str(config_path), "scrape", "--url", "https://other.test/"])
        assert mock_parser.call_args.args[0] == "https://other.test/"

    @patch("fightdata.cli.FightParser")
    def test_fetch_error_exits_1(self, mock_parser: MagicMock, config_path: Path) -> None:
        mock_parser.return_value.parse_fights.side_effect = UnexpectedStatusError(500)
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path), "scrape"])
        assert exc.value.code == 1

    def test_missing_config_exits_1(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(tmp_path / "missing.yaml"), "scrape"])
        assert exc.value.code == 1


class TestServeCommand:
    @patch("fightdata.cli.uvicorn.run")
    def test_runs_uvicorn_with_config_port(self, mock_run: MagicMock, config_path: Path) -> None:
        main(["--config", str(config_path), "serve"])
        assert mock_run.call_args.kwargs["port"] == 9001
        assert mock_run.call_args.kwargs["host"] == "0.0.0.0"

    @patch("fightdata.cli.uvicorn.run")
    def test_port_override(self, mock_run: MagicMock, config_path: Path) -> None:
        main(["--config", str(config_path), "serve", "--port", ":9100"])
        assert mock_run.call_args.kwargs["port"] == 9100

    @patch("fightdata.cli.uvicorn.run")
    def test_invalid_port_override_exits_1(
        self, mock_run: MagicMock, config_path: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(config_path), "serve", "--port", "abc"])
        assert exc.value.code == 1
        mock_run.assert_not_called()
        assert "invalid server port format: abc" in caplog.text
        assert "Unexpected error" not in caplog.text
