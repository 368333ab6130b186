"""Command-line entry point for writing, reading and sniffing DIDI containers."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Optional

import click
import yaml

from didi.config.config import DidiConfig
from didi.core.didi_reader import DidiReader, read_didi, sniff_didi
from didi.core.didi_writer import write_didi
from didi.core.errors import DidiError
from didi.monitoring.metrics import generate_latest
from didi.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

BENCH_LETTERS = ("a", "b", "c")
BENCH_RUN_LENGTH = 10


def _load_config(config_path: Optional[str]) -> DidiConfig:
    try:
        if config_path:
            return DidiConfig.from_yaml(config_path)
        return DidiConfig.from_env()
    except (ValueError, yaml.YAMLError) as exc:
        source = config_path or "DIDI_* environment"
        raise click.ClickException(f"Invalid configuration from {source}: {exc}") from exc


def generate_bench_text(repetitions: int, search_string: str) -> str:
    """Letter runs of BENCH_RUN_LENGTH followed by the search string."""
    runs = [
        BENCH_LETTERS[i % len(BENCH_LETTERS)] * BENCH_RUN_LENGTH
        for i in range(repetitions)
    ]
    runs.append(search_string)
    return "".join(runs)


def manual_search(path: Path, search_string: str) -> bool:
    """Baseline for the benchmark: load the whole file and scan it."""
    content = path.read_text(encoding="utf-8")
    return search_string in content


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML config file (defaults to DIDI_* environment variables).",
)
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.option(
    "--json-logs/--console-logs",
    default=None,
    help="Render logs as JSON or for the console.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    log_level: Optional[str],
    json_logs: Optional[bool],
) -> None:
    """Write, read and sniff DIDI containers."""
    config = _load_config(config_path)
    if log_level is not None:
        config.log_level = log_level
    if json_logs is not None:
        config.json_logs = json_logs
    try:
        configure_logging(level=config.log_level, json_output=config.json_logs)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level") from exc
    ctx.obj = config


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--search", "-s", "search_string", required=True, help="String to record in the header.")
@click.option("--data", "-d", default=None, help="Text to store.")
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read text to store from this file.",
)
def write(path: str, search_string: str, data: Optional[str], input_path: Optional[str]) -> None:
    """Encode text into a DIDI container at PATH."""
    if (data is None) == (input_path is None):
        raise click.UsageError("Pass exactly one of --data or --input.")
    if input_path is not None:
        data = Path(input_path).read_text(encoding="utf-8")

    try:
        written = write_didi(path, data, search_string)
    except (DidiError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Wrote {written} bytes to {path}")


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_obj
def read(config: DidiConfig, path: str) -> None:
    """Decode a DIDI container and print its contents."""
    try:
        record = read_didi(path, max_payload_size=config.max_payload_size)
    except (DidiError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Decoded Data: {record.data}")
    click.echo(f"Stored Search String: {record.search_string}")
    click.echo(f"Contains Search String: {str(record.contains).lower()}")


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
def sniff(path: str) -> None:
    """Print the stored search string without decoding the payload."""
    try:
        result = sniff_didi(path)
    except (DidiError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Stored Search String: {result.search_string}")
    click.echo(f"Contains Search String: {str(result.contains).lower()}")


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
def info(path: str) -> None:
    """Show header fields and sizes."""
    try:
        with DidiReader(path) as reader:
            header = reader.header
            stats = reader.get_stats()
    except (DidiError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Version: {header.version}")
    click.echo(f"Search String: {header.search_string}")
    click.echo(f"Contains: {str(header.contains).lower()}")
    click.echo(f"Header Size: {stats.header_size}")
    click.echo(f"Payload Size: {stats.payload_size}")
    click.echo(repr(stats))


@cli.command()
@click.option("--repetitions", "-n", type=int, default=None, help="Number of letter runs to generate.")
@click.option("--workdir", type=click.Path(file_okay=False), default=None, help="Scratch directory.")
@click.option("--show-metrics", is_flag=True, help="Print Prometheus metrics afterwards.")
@click.pass_obj
def bench(
    config: DidiConfig,
    repetitions: Optional[int],
    workdir: Optional[str],
    show_metrics: bool,
) -> None:
    """Compare sniffing a container with a full-text search."""
    repetitions = repetitions or config.bench_repetitions
    work = Path(workdir or config.workdir)
    os.makedirs(work, exist_ok=True)
    search_string = config.bench_search_string

    text_path = work / "large_example.txt"
    didi_path = work / "large_example.didi"

    if text_path.exists():
        click.echo(f"File already exists: {text_path}")
    else:
        text_path.write_text(generate_bench_text(repetitions, search_string), encoding="utf-8")

    data = text_path.read_text(encoding="utf-8")
    write_didi(didi_path, data, search_string)

    start = time.perf_counter()
    result = sniff_didi(didi_path)
    sniff_seconds = time.perf_counter() - start

    start = time.perf_counter()
    found = manual_search(text_path, search_string)
    manual_seconds = time.perf_counter() - start

    logger.info(
        "bench_finished",
        repetitions=repetitions,
        sniff_seconds=sniff_seconds,
        manual_seconds=manual_seconds,
    )
    click.echo(f"Sniffer found the search: {result.search_string} {str(result.contains).lower()}")
    click.echo(f"Sniffer duration: {sniff_seconds:.6f}s")
    click.echo(f"Manual search found the string: {search_string} {str(found).lower()}")
    click.echo(f"Manual search duration: {manual_seconds:.6f}s")
    if show_metrics:
        click.echo(generate_latest().decode("utf-8"))


if __name__ == "__main__":
    cli()
