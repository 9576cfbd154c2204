"""Tests for aggregate path statistics."""

from __future__ import annotations

import pytest

from paths_le.config import AnalysisConfig
from paths_le.core import analyze_paths, analyze_validation
from paths_le.extraction import PathType


def test_counts_unique_and_duplicates() -> None:
    result = analyze_paths(["/a", "/a", "/b"])

    assert result.count == 3
    assert result.unique == 2
    assert result.duplicates == 1


def test_blank_lines_are_dropped() -> None:
    result = analyze_paths(["/a", "", "   ", "/b"])

    assert result.count == 2
    assert result.duplicates == 0


def test_type_histogram_covers_every_type() -> None:
    result = analyze_paths(["/etc/hosts", "./a", "notes.txt", "plain"])

    assert set(result.types) == set(PathType)
    assert result.types[PathType.ABSOLUTE] == 1
    assert result.types[PathType.RELATIVE] == 1
    assert result.types[PathType.FILE] == 1
    assert result.types[PathType.UNKNOWN] == 1
    assert result.types[PathType.URL] == 0


def test_validation_summary_is_syntactic() -> None:
    summary = analyze_validation(["/srv/a.txt", "../escape", "a|b"])

    assert summary.valid == 1
    assert summary.invalid == 2
    assert summary.broken == 0
    assert summary.inaccessible == 2
    assert dict(summary.permissions) == {"read-write": 1, "read-only": 0, "no-access": 2}


def test_sections_can_be_switched_off() -> None:
    config = AnalysisConfig(include_validation=False, include_patterns=False)

    result = analyze_paths(["/a"], config)

    assert result.validation is None
    assert result.patterns is None


def test_default_includes_every_section() -> None:
    result = analyze_paths(["/src/a.ts", "/src/b.ts"])

    assert result.validation is not None and result.validation.valid == 2
    assert result.patterns is not None
    assert result.patterns.common_patterns[0].pattern == "/XXX/X.XX"


def test_to_dict_uses_wire_names() -> None:
    payload = analyze_paths(["/a", "/a"]).to_dict()

    assert payload["count"] == 2
    assert payload["types"]["absolute"] == 2
    assert payload["types"]["file"] == 0
    assert payload["validation"]["permissions"]["read-write"] == 2
    pattern = payload["patterns"]["commonPatterns"][0]
    assert pattern == {"pattern": "/X", "count": 2, "percentage": 100.0, "examples": ["/a", "/a"]}
    assert payload["patterns"]["depthDistribution"] == {"1": 2}


def test_result_mappings_are_read_only() -> None:
    result = analyze_paths(["/a"])

    with pytest.raises(TypeError):
        result.types[PathType.FILE] = 5  # type: ignore[index]


def test_should_stop_limits_every_statistic() -> None:
    seen: list[int] = []

    def stop_after_two(processed: int) -> bool:
        seen.append(processed)
        return processed >= 2

    result = analyze_paths(["/a", "", "./b", "/c", "/d"], should_stop=stop_after_two)

    assert result.count == 2
    assert sum(result.types.values()) == 2
    assert result.validation is not None and result.validation.valid == 2
    assert seen == [0, 1, 2]
