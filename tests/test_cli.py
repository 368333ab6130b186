"""End-to-end tests for the didi command line."""
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from didi.cli.main import cli, generate_bench_text  # noqa: E402
from didi.core import read_didi, write_didi  # noqa: E402

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_write_then_read(runner: CliRunner, didi_path: Path) -> None:
    result = runner.invoke(
        cli, ["write", str(didi_path), "--search", "xyz", "--data", "aaabbccccxyz"]
    )
    assert result.exit_code == 0, result.output
    assert f"to {didi_path}" in result.output

    result = runner.invoke(cli, ["read", str(didi_path)])
    assert result.exit_code == 0, result.output
    assert "Decoded Data: aaabbccccxyz" in result.output
    assert "Stored Search String: xyz" in result.output
    assert "Contains Search String: true" in result.output


def test_write_from_input_file(runner: CliRunner, tmp_path: Path, didi_path: Path) -> None:
    source = tmp_path / "input.txt"
    source.write_text("aaaaaaaaaaaab", encoding="utf-8")

    result = runner.invoke(
        cli, ["write", str(didi_path), "-s", "ab", "-i", str(source)]
    )
    assert result.exit_code == 0, result.output
    assert read_didi(didi_path) == ("aaaaaaaaaaaab", "ab", True)


def test_write_requires_one_source(runner: CliRunner, didi_path: Path) -> None:
    result = runner.invoke(cli, ["write", str(didi_path), "--search", "x"])
    assert result.exit_code == 2
    assert "exactly one of --data or --input" in result.output


def test_write_search_string_too_long(runner: CliRunner, didi_path: Path) -> None:
    result = runner.invoke(
        cli, ["write", str(didi_path), "--search", "q" * 256, "--data", "abc"]
    )
    assert result.exit_code == 1
    assert "Search string too long" in result.output
    assert not didi_path.exists()


def test_sniff(runner: CliRunner, didi_path: Path) -> None:
    write_didi(didi_path, "aaabbcccc", "jjjjj")

    result = runner.invoke(cli, ["sniff", str(didi_path)])
    assert result.exit_code == 0, result.output
    assert "Stored Search String: jjjjj" in result.output
    assert "Contains Search String: false" in result.output


def test_info(runner: CliRunner, didi_path: Path) -> None:
    write_didi(didi_path, "aaabbcccc", "abc")

    result = runner.invoke(cli, ["info", str(didi_path)])
    assert result.exit_code == 0, result.output
    assert "Version: 1" in result.output
    assert "Header Size: 10" in result.output
    assert "Payload Size: 6" in result.output


def test_read_missing_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["read", str(tmp_path / "nope.didi")])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_sniff_invalid_file(runner: CliRunner, didi_path: Path) -> None:
    didi_path.write_bytes(b"not a container")
    result = runner.invoke(cli, ["sniff", str(didi_path)])
    assert result.exit_code == 1
    assert "Invalid DIDI magic" in result.output


def test_read_respects_config_payload_limit(
    runner: CliRunner, tmp_path: Path, didi_path: Path
) -> None:
    write_didi(didi_path, "aaabbcccc", "abc")
    config = tmp_path / "didi.yaml"
    config.write_text("max_payload_size: 3\n", encoding="utf-8")

    result = runner.invoke(cli, ["--config", str(config), "read", str(didi_path)])
    assert result.exit_code == 1
    assert "exceeds maximum 3 bytes" in result.output


def test_bench(runner: CliRunner, tmp_path: Path) -> None:
    workdir = tmp_path / "bench"
    result = runner.invoke(
        cli,
        ["--log-level", "WARNING", "bench", "-n", "30", "--workdir", str(workdir), "--show-metrics"],
    )
    assert result.exit_code == 0, result.output
    assert "Sniffer found the search: custom_formats_are_interesting true" in result.output
    assert "Manual search found the string: custom_formats_are_interesting true" in result.output
    assert "didi_reads_total" in result.output

    record = read_didi(workdir / "large_example.didi")
    assert record.data == generate_bench_text(30, "custom_formats_are_interesting")

    # Second run reuses the generated text file
    result = runner.invoke(cli, ["bench", "-n", "30", "--workdir", str(workdir)])
    assert result.exit_code == 0, result.output
    assert "File already exists" in result.output


def test_generate_bench_text() -> None:
    text = generate_bench_text(4, "end")
    assert text == "a" * 10 + "b" * 10 + "c" * 10 + "a" * 10 + "end"


def test_write_unencodable_data(runner: CliRunner, didi_path: Path) -> None:
    result = runner.invoke(
        cli, ["write", str(didi_path), "-s", "a", "-d", "a\udcff"]
    )
    assert result.exit_code == 1
    assert "not encodable as UTF-8" in result.output
    assert not didi_path.exists()


def test_invalid_env_config(runner: CliRunner, didi_path: Path, monkeypatch) -> None:
    write_didi(didi_path, "aaab", "b")
    monkeypatch.setenv("DIDI_MAX_PAYLOAD_SIZE", "lots")

    result = runner.invoke(cli, ["sniff", str(didi_path)])
    assert result.exit_code == 1
    assert "Invalid configuration from DIDI_* environment" in result.output


def test_invalid_yaml_config(runner: CliRunner, tmp_path: Path, didi_path: Path) -> None:
    write_didi(didi_path, "aaab", "b")
    config = tmp_path / "broken.yaml"
    config.write_text("log_level: [unclosed\n", encoding="utf-8")

    result = runner.invoke(cli, ["--config", str(config), "sniff", str(didi_path)])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_invalid_log_level(runner: CliRunner, didi_path: Path) -> None:
    write_didi(didi_path, "aaab", "b")

    result = runner.invoke(cli, ["--log-level", "loud", "sniff", str(didi_path)])
    assert result.exit_code == 2
    assert "Invalid log level" in result.output
