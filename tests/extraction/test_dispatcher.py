"""Tests for the extraction dispatcher."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from paths_le.errors import ErrorCategory, ErrorSeverity, RecoveryAction
from paths_le.extraction import (
    SUPPORTED_FORMATS,
    ExtractorRegistry,
    extract_file,
    extract_paths,
    guess_language_id,
)


class ExplodingExtractor:
    def __init__(self, name: str, exc: Exception) -> None:
        self.name = name
        self._exc = exc

    def extract(self, content: str):
        raise self._exc


def _registry_with(extractor, category: str) -> ExtractorRegistry:
    local = ExtractorRegistry()
    local.register_extractor(extractor, categories=[category])
    return local


def test_routes_aliases_to_their_extractor() -> None:
    result = extract_paths("PATH=/opt/application\nTMP=/tmp/cache", "env")

    assert result.success is True
    assert [path.value for path in result.paths] == ["/opt/application", "/tmp/cache"]
    assert result.errors == ()


def test_jsx_language_id_uses_javascript_extractor() -> None:
    result = extract_paths("import Btn from './Btn';", "javascriptreact")

    assert [path.context for path in result.paths] == ["JS import"]


def test_unsupported_format_is_informational() -> None:
    result = extract_paths("some content", "python")

    assert result.success is False
    assert result.paths == ()
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.category is ErrorCategory.FORMAT
    assert error.severity is ErrorSeverity.INFO
    assert error.recoverable is False
    assert error.recovery_action is RecoveryAction.NONE
    assert "not supported" in error.message
    assert "python" in error.message
    assert error.context == "File type: python"
    assert dict(error.metadata) == {
        "languageId": "python",
        "supportedFormats": list(SUPPORTED_FORMATS),
    }


def test_extractor_failure_becomes_recoverable_parsing_error() -> None:
    local = _registry_with(ExplodingExtractor("boom", RuntimeError("Parse error occurred")), "csv")

    result = extract_paths("bad,content", "csv", registry_override=local, filepath="data.csv")

    assert result.success is False
    assert result.paths == ()
    error = result.errors[0]
    assert error.category is ErrorCategory.PARSING
    assert error.severity is ErrorSeverity.ERROR
    assert error.message == "Parse error occurred"
    assert error.recoverable is True
    assert error.recovery_action is RecoveryAction.SKIP
    assert error.filepath == "data.csv"
    assert error.stack is not None and "RuntimeError" in error.stack


def test_exception_without_message_uses_fallback_text() -> None:
    local = _registry_with(ExplodingExtractor("silent", ValueError()), "toml")

    result = extract_paths("[bad]", "toml", registry_override=local)

    assert result.errors[0].message == "Unknown parsing error"


def test_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    local = _registry_with(ExplodingExtractor("boom", RuntimeError("kaput")), "html")

    with caplog.at_level("ERROR", logger="paths_le.extraction.extract"):
        extract_paths("<a>", "html", registry_override=local)

    assert "Extractor 'boom' failed" in caplog.text


def test_results_are_immutable() -> None:
    result = extract_paths("Name,Path\nconfig,/etc/app/config.json", "csv")

    assert isinstance(result.paths, tuple)
    assert isinstance(result.errors, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.paths = ()  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.paths[0].value = "/tmp"  # type: ignore[misc]


def test_to_dict_uses_wire_names() -> None:
    payload = extract_paths("x", "python").to_dict()

    assert payload["success"] is False
    assert payload["errors"][0]["recoveryAction"] == "none"
    assert payload["errors"][0]["metadata"]["languageId"] == "python"


@pytest.mark.parametrize(
    ("name", "language_id"),
    [
        ("config.json", "json"),
        ("settings.JSONC", "jsonc"),
        (".env", "dotenv"),
        (".env.local", "dotenv"),
        ("App.tsx", "typescriptreact"),
        ("index.mjs", "javascript"),
        ("theme.scss", "scss"),
        ("page.htm", "html"),
        ("README.md", "plaintext"),
    ],
)
def test_guess_language_id(name: str, language_id: str) -> None:
    assert guess_language_id(name) == language_id


def test_extract_file_infers_format(tmp_path: Path) -> None:
    source = tmp_path / "styles.css"
    source.write_text("@import './reset.css';\n", encoding="utf-8")

    result = extract_file(source)

    assert [path.value for path in result.paths] == ["./reset.css"]


def test_extract_file_honours_explicit_format(tmp_path: Path) -> None:
    source = tmp_path / "paths.txt"
    source.write_text('{"a": "/srv/app.log"}', encoding="utf-8")

    assert extract_file(source).success is False
    assert [path.value for path in extract_file(source, format_id="json").paths] == ["/srv/app.log"]
