"""
Tests for the strictstrings command line.
"""

from __future__ import annotations

import functools
import io
from pathlib import Path

import pytest
from click.testing import CliRunner
from rich.console import Console

from strictstrings import __version__
from strictstrings import cli as cli_module
from strictstrings.pipeline import Pipeline


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def keyword_pipeline(monkeypatch, keyword_oracle):
    """Run the CLI with the keyword oracle instead of langdetect."""
    monkeypatch.setattr(cli_module, "Pipeline", functools.partial(Pipeline, oracle=keyword_oracle))


@pytest.mark.integration
class TestCli:
    def test_prints_final_strings(self, runner, sample_file):
        result = runner.invoke(cli_module.cli, [str(sample_file)])
        assert result.exit_code == 0, result.output
        assert "Processing file:" in result.output
        assert "Final strings: 3" in result.output
        assert "Hello world from the firmwar\n" in result.output
        assert "Levenshtein Filtered:     3" in result.output

    def test_quiet_prints_only_strings(self, runner, sample_file):
        result = runner.invoke(cli_module.cli, [str(sample_file), "-q"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "Failed to open config file",
            "Hello world from the firmwar",
            "www.the-jk.com",
        ]

    def test_empty_file_reports_no_strings(self, runner, tmp_path: Path):
        empty = tmp_path / "empty.bin"
        empty.write_bytes(b"")
        result = runner.invoke(cli_module.cli, [str(empty)])
        assert result.exit_code == 1
        assert "No strings found." in result.output

    def test_empty_file_quiet(self, runner, tmp_path: Path):
        empty = tmp_path / "empty.bin"
        empty.write_bytes(b"\x00\x01\x02")
        result = runner.invoke(cli_module.cli, [str(empty), "--quiet"])
        assert result.exit_code == 1
        assert result.output == ""

    def test_writes_outfile(self, runner, sample_file, tmp_path: Path):
        outfile = tmp_path / "strings.txt"
        result = runner.invoke(cli_module.cli, [str(sample_file), "-q", "-o", str(outfile)])
        assert result.exit_code == 0, result.output
        assert outfile.read_text(encoding="utf-8") == (
            "Failed to open config file\nHello world from the firmwar\nwww.the-jk.com\n"
        )

    def test_tabs_printed_verbatim(self, runner, tmp_path: Path):
        infile = tmp_path / "tabs.bin"
        infile.write_bytes(b"\x00hello\tworld text\x00")
        outfile = tmp_path / "strings.txt"
        result = runner.invoke(cli_module.cli, [str(infile), "-q", "-o", str(outfile)])
        assert result.exit_code == 0, result.output
        assert result.output == "hello\tworld text\n"
        assert outfile.read_text(encoding="utf-8") == result.output

    def test_writes_logs(self, runner, sample_file, tmp_path: Path):
        log_dir = tmp_path / "logs"
        result = runner.invoke(cli_module.cli, [str(sample_file), "-q", "-l", str(log_dir)])
        assert result.exit_code == 0, result.output
        assert (log_dir / "filtered_by_ngram.txt").read_text(encoding="utf-8") == "the jk error\n"
        assert len(list(log_dir.iterdir())) == 5

    def test_bytes_table(self, runner, sample_file):
        result = runner.invoke(cli_module.cli, [str(sample_file), "-q", "-b"])
        assert result.exit_code == 0, result.output
        assert "UTF-Bytes" in result.output
        assert "www.the-jk.com" in result.output
        # UTF-8 length of "www.the-jk.com"
        assert "14" in result.output

    def test_similarity_option(self, runner, sample_file):
        result = runner.invoke(cli_module.cli, [str(sample_file), "-q", "-s", "1.0"])
        assert result.exit_code == 0, result.output
        assert "Hello world from the firmware" in result.output.splitlines()

    def test_length_options(self, runner, sample_file):
        result = runner.invoke(cli_module.cli, [str(sample_file), "-q", "-m", "20", "-M", "27"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["Failed to open config file"]

    def test_wslen_option(self, runner, tmp_path: Path):
        path = tmp_path / "urls.bin"
        path.write_bytes(b"\x00hello_world_config_value\x00")
        result = runner.invoke(cli_module.cli, [str(path), "-q", "-W", "10"])
        assert result.exit_code == 1

    def test_invalid_threshold_is_usage_error(self, runner, sample_file):
        result = runner.invoke(cli_module.cli, [str(sample_file), "-t", "1.5"])
        assert result.exit_code == 2
        assert "lang_threshold" in result.output

    def test_missing_input_file(self, runner, tmp_path: Path):
        result = runner.invoke(cli_module.cli, [str(tmp_path / "missing.bin")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_config_file(self, runner, sample_file, tmp_path: Path):
        config = tmp_path / "config.yaml"
        config.write_text("dedup:\n  leven_threshold: 1.0\noutput:\n  quiet: true\n", encoding="utf-8")
        result = runner.invoke(cli_module.cli, [str(sample_file), "-c", str(config)])
        assert result.exit_code == 0, result.output
        assert len(result.output.splitlines()) == 4

    def test_version(self, runner):
        result = runner.invoke(cli_module.cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


@pytest.mark.integration
class TestConsoleObserver:
    def test_failed_stage_stops_progress(self):
        observer = cli_module.ConsoleObserver(Console(file=io.StringIO()))
        observer.stage_started("scan", 10)
        progress = observer._progress
        assert progress.live.is_started

        observer.stage_failed("scan")
        assert observer._progress is None
        assert not progress.live.is_started

    def test_read_error_restores_terminal(self, runner, sample_file, monkeypatch):
        started = []
        original = cli_module.ConsoleObserver.stage_started

        def tracking_start(self, stage, total):
            callback = original(self, stage, total)
            started.append(self._progress)
            return callback

        def failing_scan(self, stream, progress=None):
            raise OSError("read failed")

        monkeypatch.setattr(cli_module.ConsoleObserver, "stage_started", tracking_start)
        monkeypatch.setattr("strictstrings.extractor.ByteScanner.scan_stream", failing_scan)
        result = runner.invoke(cli_module.cli, [str(sample_file)])
        assert result.exit_code == 1
        assert "read failed" in result.output
        assert len(started) == 1
        assert not started[0].live.is_started
