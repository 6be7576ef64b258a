"""Command-line interface for StrictStrings."""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

import click
import structlog
from pydantic import ValidationError
from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    MofNCompleteColumn,
    Progress,
    TimeElapsedColumn,
    TimeRemainingColumn,
)
from rich.table import Table
from rich.text import Text

from strictstrings import __version__
from strictstrings.config import Config
from strictstrings.observability import configure_logging
from strictstrings.pipeline import NoStringsFoundError, Pipeline
from strictstrings.protocols import PipelineResult, ProgressCallback
from strictstrings.utils import atomic_write_lines

logger = structlog.get_logger(__name__)

STAGE_MESSAGES: Dict[str, str] = {
    "scan": "Grabbing strings.",
    "whitespace": "Filtering large strings without whitespace.",
    "language": "Filtering language.",
    "ngram": "Filtering impossible ngrams.",
    "leven": "Removing similar strings.",
}


class ConsoleObserver:
    """Drives rich progress bars and stage messages for the pipeline."""

    def __init__(self, console: Console, quiet: bool = False) -> None:
        self.console = console
        self.quiet = quiet
        self._progress: Optional[Progress] = None

    def stage_started(self, stage: str, total: Optional[int]) -> ProgressCallback:
        if self.quiet:
            return lambda advance: None

        self.console.print(STAGE_MESSAGES.get(stage, stage))
        amount_column = DownloadColumn() if stage == "scan" else MofNCompleteColumn()
        self._progress = Progress(
            TimeElapsedColumn(),
            BarColumn(bar_width=40),
            amount_column,
            TimeRemainingColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        task = self._progress.add_task(stage, total=total)
        progress = self._progress

        def advance(amount: int) -> None:
            progress.update(task, advance=amount)

        return advance

    def stage_finished(self, stage: str, remaining: int) -> None:
        self._stop_progress()
        if self.quiet:
            return
        if stage == "scan":
            self.console.print(f"Total strings: {remaining}")
        elif remaining:
            self.console.print(f"Remaining strings: {remaining}")

    def stage_failed(self, stage: str) -> None:
        self._stop_progress()

    def _stop_progress(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None


def render_bytes_table(strings: List[str]) -> Table:
    """Table pairing each string with its UTF-8 length and raw bytes."""
    table = Table(show_lines=False)
    table.add_column("String", no_wrap=True)
    table.add_column("UTF-Bytes", justify="right")
    table.add_column("Bytes", overflow="fold")
    for text in strings:
        raw = text.encode("utf-8")
        table.add_row(Text(text), str(len(raw)), str(list(raw)))
    return table


def print_summary(console: Console, result: PipelineResult, elapsed: float) -> None:
    console.print()
    console.print(f"Unique Strings:           {result.unique_count}")
    console.print(f"Language Filtered:        {result.language_count}")
    console.print(f"Ngram Filtered:           {result.ngram_count}")
    console.print(f"Levenshtein Filtered:     {result.final_count}")
    console.print()
    console.print(f"Execution time: {elapsed:.3f}s")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
@click.argument("infile", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--out", "-o", "outfile", type=click.Path(dir_okay=False, path_type=Path), help="Output file to write filtered strings")
@click.option("--language", "-t", "lang_threshold", type=float, default=None, help="Language detection threshold [default: 0.5]")
@click.option("--similarity", "-s", "leven_threshold", type=float, default=None, help="Similarity filtering threshold [default: 0.8]")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Silences all output except the strings")
@click.option("--logs", "-l", "log_dir", type=click.Path(file_okay=False, path_type=Path), help="Output filtered values to log directory")
@click.option("--bytes", "-b", "print_bytes", is_flag=True, default=False, help="Print byte representation after strings")
@click.option("--min", "-m", "min_length", type=int, default=None, help="Minimum length of strings to process [default: 6]")
@click.option("--max", "-M", "max_length", type=int, default=None, help="Maximum length of strings to process [default: 200]")
@click.option("--wslen", "-W", type=int, default=None, help="Maximum length of strings without whitespace [default: 30]")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level",
)
def cli(infile: Path, config_path: Optional[Path], **options: object) -> None:
    """Performs strict filtering on strings within a file's contents."""
    # Unset flags must not override values from the config file
    for flag in ("quiet", "print_bytes"):
        options[flag] = options[flag] or None

    try:
        base = Config.from_yaml(config_path) if config_path else Config()
        config = base.with_overrides(**options)
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    configure_logging(config.monitoring)

    quiet = config.output.quiet
    console = Console(quiet=quiet, highlight=False, markup=False)
    # Results are always printed, even in quiet mode
    results_console = Console(highlight=False, soft_wrap=True)

    if not quiet:
        console.print(f"Processing file:         {infile}")
        console.print(f"Language Threshold:      {config.filters.lang_threshold}")
        console.print(f"Similarity Threshold:    {config.dedup.leven_threshold}")
        console.print(f"Minimum string length:   {config.scanner.min_length}")
        console.print(f"Maximum string length:   {config.scanner.max_length}")

    start_time = time.perf_counter()
    pipeline = Pipeline(config, observer=ConsoleObserver(console, quiet))

    try:
        result = pipeline.run(infile)
    except NoStringsFoundError as e:
        logger.info("Run ended without strings", stage=e.stage.value)
        if not quiet:
            console.print("No strings found.")
        sys.exit(1)
    except OSError as e:
        raise click.ClickException(f"{e.__class__.__name__}: {e}") from e

    if not quiet:
        console.print(f"Final strings: {result.final_count}\n\n")

    if config.output.print_bytes:
        results_console.print(render_bytes_table(result.final_strings))
    else:
        for text in result.final_strings:
            click.echo(text)

    if config.output.outfile is not None:
        try:
            atomic_write_lines(config.output.outfile, result.final_strings)
        except OSError as e:
            raise click.ClickException(str(e)) from e

    if not quiet:
        print_summary(console, result, time.perf_counter() - start_time)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
