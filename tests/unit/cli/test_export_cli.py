"""
Tests for the export CLI.

Rows are read from a temporary directory of ``<table>.json`` files so no
network access is needed.
"""

import json
from unittest.mock import patch

import pytest

from seed_export.cli.__main__ import main as cli_main
from seed_export.cli.export import build_parser, main


@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "tables.yml"
    path.write_text(
        "tables:\n"
        "  - {name: weather_locations, primary_key: id}\n"
        "  - {name: alpaca_stocks, primary_key: id, unique_constraint: symbol}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def source_dir(tmp_path):
    directory = tmp_path / "dumps"
    directory.mkdir()
    (directory / "weather_locations.json").write_text("[]", encoding="utf-8")
    (directory / "alpaca_stocks.json").write_text(
        json.dumps([{"id": 1, "symbol": "AAPL", "tags": ["tech", "large-cap"]}]),
        encoding="utf-8",
    )
    return directory


@pytest.mark.unit
class TestExportParser:
    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.registry is None
        assert args.output is None
        assert args.source_dir is None
        assert args.tables is None
        assert args.dry_run is False


@pytest.mark.unit
class TestExportMain:
    def test_writes_artifact(self, tmp_path, registry_file, source_dir, capsys):
        output = tmp_path / "out" / "seed.sql"

        exit_code = main(
            [
                "--registry", str(registry_file),
                "--source-dir", str(source_dir),
                "--output", str(output),
            ]
        )

        assert exit_code == 0
        text = output.read_text(encoding="utf-8")
        assert "-- No data found for weather_locations" in text
        assert "ON CONFLICT (symbol) DO UPDATE SET" in text
        stdout = capsys.readouterr().out
        assert "Compiled: 1" in stdout
        assert "Empty:    1" in stdout
        assert f"Seed file generated: {output}" in stdout

    def test_dry_run_prints_sql(self, tmp_path, registry_file, source_dir, capsys):
        exit_code = main(
            ["--registry", str(registry_file), "--source-dir", str(source_dir), "--dry-run"]
        )

        assert exit_code == 0
        captured = capsys.readouterr()
        assert captured.out.startswith("-- " + "=" * 60 + "\n-- SUPABASE SEED DATA")
        assert "ARRAY['tech', 'large-cap']::text[]" in captured.out
        assert "Seed Export Summary" in captured.err

    def test_output_from_settings(self, tmp_path, registry_file, source_dir, monkeypatch):
        output = tmp_path / "from_env.sql"
        monkeypatch.setenv("SEED_EXPORT_OUTPUT_PATH", str(output))

        assert main(["--registry", str(registry_file), "--source-dir", str(source_dir)]) == 0
        assert output.exists()

    def test_tables_subset(self, tmp_path, registry_file, source_dir, capsys):
        exit_code = main(
            [
                "--registry", str(registry_file),
                "--source-dir", str(source_dir),
                "--tables", "alpaca_stocks",
                "--dry-run",
            ]
        )

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "weather_locations" not in out
        assert "SEED DATA FOR ALPACA_STOCKS" in out

    def test_unknown_table(self, registry_file, source_dir, capsys):
        exit_code = main(
            ["--registry", str(registry_file), "--source-dir", str(source_dir), "--tables", "nope"]
        )

        assert exit_code == 1
        assert "Unknown table" in capsys.readouterr().err

    def test_missing_registry(self, tmp_path, source_dir, capsys):
        exit_code = main(["--registry", str(tmp_path / "missing.yml"), "--source-dir", str(source_dir)])

        assert exit_code == 1
        assert "Invalid table registry" in capsys.readouterr().err

    def test_missing_credentials(self, registry_file, capsys):
        """Test the REST source refuses to start without a URL or key."""
        exit_code = main(["--registry", str(registry_file), "--dry-run"])

        assert exit_code == 1
        assert "Cannot create row source" in capsys.readouterr().err

    def test_every_table_failed(self, tmp_path, registry_file, capsys):
        empty_dir = tmp_path / "empty"
        empty_dir.mkdir()
        output = tmp_path / "seed.sql"

        exit_code = main(
            [
                "--registry", str(registry_file),
                "--source-dir", str(empty_dir),
                "--output", str(output),
            ]
        )

        assert exit_code == 1
        assert not output.exists()
        err = capsys.readouterr().err
        assert "Failed:   2" in err
        assert "Export failed" in err

    def test_write_error(self, tmp_path, registry_file, source_dir, capsys):
        with patch(
            "seed_export.orchestration.export_job.write_artifact",
            side_effect=PermissionError("read-only file system"),
        ):
            exit_code = main(
                [
                    "--registry", str(registry_file),
                    "--source-dir", str(source_dir),
                    "--output", str(tmp_path / "seed.sql"),
                ]
            )

        assert exit_code == 1
        assert "Cannot write seed file" in capsys.readouterr().err


@pytest.mark.unit
class TestCliRouter:
    def test_export_command_delegates(self):
        with patch("seed_export.cli.export.main", return_value=0) as mock_main:
            assert cli_main(["export", "--dry-run"]) == 0

        mock_main.assert_called_once_with(["--dry-run"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli_main([])
