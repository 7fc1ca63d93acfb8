# tests/test_cli.py
from __future__ import annotations

import csv
import io
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from strangerstrings.cli import main


@pytest.fixture
def binary_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.bin"
    path.write_bytes(b"\x7fELF\x00hello\x00\x01xqzjx\x00\x00world\xff")
    return path


def test_cli_version():
    result = subprocess.run(
        [sys.executable, "-m", "strangerstrings.cli", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "strangerstrings 0.1.0" in result.stdout


def test_cli_analyzes_file(model_file: Path, binary_file: Path):
    result = subprocess.run(
        [sys.executable, "-m", "strangerstrings.cli", "-m", str(model_file), str(binary_file)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert sorted(result.stdout.split()) == ["hello", "world"]


def test_cli_stdin(model_file: Path):
    result = subprocess.run(
        [sys.executable, "-m", "strangerstrings.cli", "-m", str(model_file), "-"],
        input="hello xqzj\nworld\n",
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert sorted(result.stdout.split()) == ["hello", "world"]


def test_cli_model_from_environment(model_file: Path, binary_file: Path):
    result = subprocess.run(
        [sys.executable, "-m", "strangerstrings.cli", str(binary_file)],
        capture_output=True,
        text=True,
        env={**os.environ, "STRANGERSTRINGS_MODEL": str(model_file)},
    )
    assert result.returncode == 0
    assert "hello" in result.stdout


def test_no_input_is_an_error(capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "No input file specified" in capsys.readouterr().err


def test_missing_model_is_an_error(tmp_path: Path, binary_file: Path):
    with pytest.raises(SystemExit) as exc_info:
        main(["-m", str(tmp_path / "missing.sng"), str(binary_file)])
    assert exc_info.value.code == 1


def test_missing_input_is_an_error(tmp_path: Path, model_file: Path):
    with pytest.raises(SystemExit) as exc_info:
        main(["-m", str(model_file), str(tmp_path / "missing.bin")])
    assert exc_info.value.code == 1


def test_malformed_model_is_an_error(tmp_path: Path, binary_file: Path):
    bad = tmp_path / "bad.sng"
    bad.write_text("no model type here\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        main(["-m", str(bad), str(binary_file)])
    assert exc_info.value.code == 1


def test_unknown_encoding_is_an_error(model_file: Path, binary_file: Path):
    with pytest.raises(SystemExit) as exc_info:
        main(["-m", str(model_file), "-e", "ebcdic", str(binary_file)])
    assert exc_info.value.code == 1


def test_min_length_must_be_positive(model_file: Path, binary_file: Path):
    with pytest.raises(SystemExit) as exc_info:
        main(["-m", str(model_file), "-l", "0", str(binary_file)])
    assert exc_info.value.code == 2


def test_offset_sort(
    capsys: pytest.CaptureFixture[str], model_file: Path, binary_file: Path
):
    main(["-m", str(model_file), "-s", "offset", str(binary_file)])
    assert capsys.readouterr().out == "hello\nworld\n"


def test_alpha_sort_verbose(
    capsys: pytest.CaptureFixture[str], model_file: Path, binary_file: Path
):
    main(["-m", str(model_file), "-v", "-s", "alpha", str(binary_file)])
    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[0].split() == ["String", "Score", "Threshold", "Offset", "Valid"]
    shown = [line.split()[0] for line in lines[2:]]
    assert shown == ['"hello"', '"world"', '"xqzjx"']
    assert "0x5" in lines[2]
    assert lines[4].endswith("✗")
    assert "Accepted: 2 strings" in captured.err
    assert "Total: 3 strings" in captured.err


def test_offset_sort_on_stdin_warns(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    model_file: Path,
):
    monkeypatch.setattr(sys, "stdin", io.StringIO("world hello"))
    main(["-m", str(model_file), "-s", "offset", "-"])
    captured = capsys.readouterr()
    assert "Offset sorting only available for binary files" in captured.err
    assert sorted(captured.out.split()) == ["hello", "world"]


def test_unique_keeps_best(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    model_file: Path,
):
    monkeypatch.setattr(sys, "stdin", io.StringIO("hello hello world hello"))
    main(["-m", str(model_file), "-u", "-"])
    assert sorted(capsys.readouterr().out.split()) == ["hello", "world"]


def test_json_output(
    capsys: pytest.CaptureFixture[str], model_file: Path, binary_file: Path
):
    main(["-m", str(model_file), "-f", "json", "-s", "offset", str(binary_file)])
    payload = json.loads(capsys.readouterr().out)
    assert [item["original_string"] for item in payload] == ["hello", "world"]
    assert payload[0]["offset"] == 5
    assert payload[0]["encoding"] == "ASCII"


def test_csv_output_to_file(tmp_path: Path, model_file: Path, binary_file: Path):
    out = tmp_path / "results.csv"
    main(["-m", str(model_file), "-f", "csv", "-s", "offset", "-o", str(out), str(binary_file)])
    rows = list(csv.DictReader(out.read_text(encoding="utf-8").splitlines()))
    assert [row["string"] for row in rows] == ["hello", "world"]
    assert rows[0]["valid"] == "true"
    assert rows[1]["offset"] == "19"


def test_scripts_flag(
    capsys: pytest.CaptureFixture[str], tmp_path: Path, model_file: Path
):
    path = tmp_path / "utf8.bin"
    path.write_bytes(b"\x00\x00" + "hello world".encode("utf-8") + b"\x00")
    main(["-m", str(model_file), "--scripts", "-e", "utf-8", "-f", "json", str(path)])
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["scorer_name"] == "Trigram"
    assert payload[0]["detected_script"] == "Latin"


def test_info(capsys: pytest.CaptureFixture[str], model_file: Path):
    main(["-m", str(model_file), "--info"])
    out = capsys.readouterr().out
    assert "=== Model Information ===" in out
    assert "Type: lowercase" in out
    assert "Length  4: -2.710" in out
    assert "Length 100+: -6.300" in out


def test_test_command(capsys: pytest.CaptureFixture[str], model_file: Path):
    main(["-m", str(model_file), "--test", "-v"])
    out = capsys.readouterr().out
    assert "=== StrangerStrings Test Results ===" in out
    assert "Valid English:" in out
    assert '✓ "hello"' in out
    assert '✗ "Ta&@"' in out
