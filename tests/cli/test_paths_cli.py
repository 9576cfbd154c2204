"""End-to-end tests for the paths-le command line."""
from __future__ import annotations

import io
import json
import logging
import os
from pathlib import Path

import pytest

from paths_le.cli import build_parser, main
from paths_le.cli.commands.postprocess import dedupe_lines, sort_lines


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    # Keeps a repository-level config/paths-le.yaml from leaking into the run.
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_extract_text_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write(
        tmp_path / "data.csv",
        "Name,Path,Type\nconfig,/etc/app/config.json,file\nlog,./logs/app.log,file\n",
    )

    exit_code = main(["extract", str(source)])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["/etc/app/config.json", "./logs/app.log"]


def test_extract_json_output_with_dedupe(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write(tmp_path / "settings.json", '{"a": "/srv/app.log", "b": "/srv/app.log"}')

    assert main(["extract", str(source), "--output", "json"]) == 0
    assert len(json.loads(capsys.readouterr().out)) == 2

    assert main(["extract", str(source), "--output", "json", "--dedupe"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert len(payload) == 1
    assert payload[0]["value"] == "/srv/app.log"
    assert payload[0]["source"] == str(source)
    assert payload[0]["position"] == {"line": 1, "column": 1}


def test_extract_csv_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write(tmp_path / "paths.csv", "Name,Path\nconfig,/etc/app/config.json\n")

    assert main(["extract", str(source), "--output", "csv"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "value,type,line,column,context,source"
    assert lines[1].startswith("/etc/app/config.json,")
    assert "CSV cell [2,2]" in lines[1]


def test_extract_format_override(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write(tmp_path / "paths.txt", "Name,Path\nconfig,/etc/app/config.json\n")

    assert main(["extract", str(source), "--format", "csv"]) == 0
    assert capsys.readouterr().out.splitlines() == ["/etc/app/config.json"]


def test_extract_unsupported_format_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write(tmp_path / "notes.txt", "/etc/hosts\n")

    assert main(["extract", str(source)]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "not supported" in captured.err


def test_extract_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["extract", str(tmp_path / "absent.csv")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_extract_blocked_by_safety_threshold(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _write(tmp_path / "strict.yaml", "safety:\n  file_size_warn_bytes: 1000\n")
    source = _write(tmp_path / "big.json", '"' + "x" * 1000 + '"')

    assert main(["--config", str(config), "extract", str(source)]) == 1
    assert "File size (1002 bytes) exceeds safety threshold (1000 bytes)" in capsys.readouterr().err


def test_extract_canonical_resolves_against_workspace(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = _write(tmp_path / "paths.csv", "Name,Path\nlog,./logs/app.log\n")

    assert main(["extract", str(source), "--canonical"]) == 0

    expected = os.path.join(os.getcwd(), "logs", "app.log")
    assert capsys.readouterr().out.splitlines() == [expected]


def test_validate_reports_each_status(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    existing = _write(tmp_path / "present.txt", "x")
    missing = tmp_path / "gone.txt"
    listing = _write(tmp_path / "paths.lst", f"{existing}\n{missing}\n../escape\n\n")

    exit_code = main(["validate", str(listing)])

    assert exit_code == 1
    assert capsys.readouterr().out.splitlines() == [
        f"valid\t{existing}",
        f"broken\t{missing}\t(Path does not exist)",
        "invalid\t../escape\t(Path contains traversal sequences (..))",
    ]


def test_validate_without_existence_checks(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    listing = _write(tmp_path / "paths.lst", "/nowhere/a.txt\n")

    exit_code = main(["validate", str(listing), "--no-check-existence", "--output", "json"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == [
        {"path": "/nowhere/a.txt", "status": "valid", "exists": True, "permissions": "read-write"}
    ]


def test_validate_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("a|b\n"))

    assert main(["validate"]) == 1
    assert capsys.readouterr().out.startswith("invalid\ta|b\t(Path contains invalid characters)")


def test_analyze_text_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    listing = _write(tmp_path / "paths.lst", "/a\n/a\n/b\n")

    assert main(["analyze", str(listing)]) == 0

    output = capsys.readouterr().out
    assert "Total paths: 3" in output
    assert "Unique paths: 2" in output
    assert "Duplicates: 1" in output
    assert "  absolute: 3" in output
    assert "Common patterns:" in output


def test_analyze_json_without_sections(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    listing = _write(tmp_path / "paths.lst", "/a\n./b\n")

    assert main(["analyze", str(listing), "--output", "json", "--no-validation", "--no-patterns"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["count"] == 2
    assert payload["types"]["relative"] == 1
    assert "validation" not in payload
    assert "patterns" not in payload


def test_minimal_preset_drops_analysis_sections(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    listing = _write(tmp_path / "paths.lst", "/a\n")

    assert main(["--preset", "minimal", "analyze", str(listing), "--output", "json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert "validation" not in payload
    assert "patterns" not in payload


def test_dedupe_command(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(" /b \n/a\n/b\n\n"))

    assert main(["dedupe", "-"]) == 0
    assert capsys.readouterr().out.splitlines() == ["/b", "/a"]


def test_sort_command_uses_configured_order(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config = _write(tmp_path / "order.yaml", "sort_order: length-desc\n")
    listing = _write(tmp_path / "paths.lst", "a\na/bb\nccc\n")

    assert main(["--config", str(config), "sort", str(listing)]) == 0
    assert capsys.readouterr().out.splitlines() == ["a/bb", "ccc", "a"]

    assert main(["sort", str(listing), "--order", "desc"]) == 0
    assert capsys.readouterr().out.splitlines() == ["ccc", "a/bb", "a"]


def test_missing_config_file_is_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--config", str(tmp_path / "absent.yaml"), "dedupe", "-"]) == 1
    assert "Configuration error" in capsys.readouterr().err


def test_invalid_config_is_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _write(tmp_path / "bad.yaml", "output_format: xml\n")

    assert main(["--config", str(config), "dedupe", "-"]) == 1
    assert "Configuration validation failed" in capsys.readouterr().err


def test_line_helpers() -> None:
    assert dedupe_lines(["x", " x ", "", "y"]) == ["x", "y"]
    assert sort_lines(["B", "a", "c"]) == ["a", "B", "c"]
    assert sort_lines(["B", "a", "c"], "desc") == ["c", "B", "a"]
    assert sort_lines(["bb", "a", "ccc"], "length-asc") == ["a", "bb", "ccc"]
    with pytest.raises(ValueError):
        sort_lines([], "random")


def test_root_script_reexports_main() -> None:
    import main as script

    assert script.main is main


@pytest.mark.parametrize("command", ["validate", "analyze", "dedupe", "sort"])
def test_undecodable_input_is_reported(
    command: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    listing = tmp_path / "latin1.lst"
    listing.write_bytes(b"/caf\xe9/menu.txt\n")

    assert main([command, str(listing)]) == 1
    assert f"error: cannot read {listing}" in capsys.readouterr().err


def test_extract_warns_about_many_documents(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    config = _write(tmp_path / "few.yaml", "safety:\n  many_documents_threshold: 2\n")
    sources = [_write(tmp_path / f"doc{index}.json", f'{{"log": "/srv/{index}.log"}}') for index in range(3)]

    with caplog.at_level(logging.WARNING):
        assert main(["--config", str(config), "extract", *map(str, sources)]) == 0

    assert capsys.readouterr().out.splitlines() == ["/srv/0.log", "/srv/1.log", "/srv/2.log"]
    assert "Processing 3 documents exceeds the many-documents threshold (2)" in caplog.messages


def test_validate_stops_at_item_threshold(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    config = _write(tmp_path / "small.yaml", "safety:\n  large_output_lines_threshold: 100\n")
    listing = _write(tmp_path / "paths.lst", "\n".join(f"/data/{index}.txt" for index in range(150)))

    with caplog.at_level(logging.WARNING):
        exit_code = main(["--config", str(config), "validate", str(listing), "--no-check-existence"])

    assert exit_code == 1
    assert len(capsys.readouterr().out.splitlines()) == 101
    assert "Validation cancelled after 101 of 150 paths" in caplog.messages


def test_analyze_stops_at_item_threshold(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    config = _write(tmp_path / "small.yaml", "safety:\n  large_output_lines_threshold: 100\n")
    listing = _write(tmp_path / "paths.lst", "\n".join(f"/data/{index}.txt" for index in range(150)))

    with caplog.at_level(logging.WARNING):
        assert main(["--config", str(config), "analyze", str(listing), "--output", "json"]) == 0

    assert json.loads(capsys.readouterr().out)["count"] == 101
    assert "Analysis cancelled after 101 of 150 paths" in caplog.messages


def test_validate_stops_when_time_budget_is_spent(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    listing = _write(tmp_path / "paths.lst", "/a\n/b\n")
    readings = iter([0.0, 0.0, 6.0])
    # One reading for the batch start, then one per should_stop call.
    monkeypatch.setattr("time.monotonic", lambda: next(readings, 6.0))

    assert main(["validate", str(listing), "--no-check-existence"]) == 1
    assert capsys.readouterr().out.splitlines() == ["valid\t/a"]
