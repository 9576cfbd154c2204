"""Tests for the JavaScript/TypeScript extractor."""

from __future__ import annotations

import pytest

from paths_le.extraction import MODULE_RULES, PathType, SourcePosition, classify
from paths_le.extraction.formats import extract_from_javascript
from paths_le.extraction.formats.javascript import is_module_path


def test_extracts_es_module_imports() -> None:
    content = (
        "import React from './components/App';\n"
        "import { Button } from './components/Button';\n"
        "import * as utils from '../utils/helpers';"
    )

    assert [path.value for path in extract_from_javascript(content)] == [
        "./components/App",
        "./components/Button",
        "../utils/helpers",
    ]


def test_package_imports_are_rejected() -> None:
    content = "import React from 'react';\nimport Btn from './Btn';"

    result = extract_from_javascript(content)

    assert len(result) == 1
    assert result[0].value == "./Btn"
    assert result[0].type is PathType.RELATIVE
    assert result[0].position == SourcePosition(line=2, column=1)


def test_only_bare_packages_yields_nothing() -> None:
    content = (
        "import React from 'react';\n"
        "import { useState } from 'react';\n"
        "const express = require('express');\n"
        "import { Button } from '@mui/material';"
    )

    assert extract_from_javascript(content) == []


def test_dynamic_import_require_and_export() -> None:
    content = (
        "const lazy = import('../lazy/component');\n"
        "const fs = require('fs');\n"
        "const path = require('./utils/path');\n"
        "export * from '../utils/helpers';"
    )

    result = extract_from_javascript(content)

    assert [(path.value, path.context) for path in result] == [
        ("../lazy/component", "JS dynamic import"),
        ("./utils/path", "JS require"),
        ("../utils/helpers", "JS export"),
    ]


def test_context_per_statement_kind() -> None:
    content = (
        "import App from './App';\n"
        "require('./config');\n"
        "import('./dynamic');\n"
        "export { default } from './utils';"
    )

    assert [path.context for path in extract_from_javascript(content)] == [
        "JS import",
        "JS require",
        "JS dynamic import",
        "JS export",
    ]


def test_column_is_match_start() -> None:
    result = extract_from_javascript("const config = require('./config');")

    assert result[0].position == SourcePosition(line=1, column=16)


def test_windows_paths_keep_source_escapes() -> None:
    content = r"import config from 'C:\\Users\\name\\config';" + "\n" + r"require('D:\\project\\file');"

    result = extract_from_javascript(content)

    assert [path.value for path in result] == [
        r"C:\\Users\\name\\config",
        r"D:\\project\\file",
    ]
    assert all(path.type is PathType.ABSOLUTE for path in result)


def test_urls_and_absolute_paths() -> None:
    content = (
        "import module from 'https://cdn.example.com/module.js';\n"
        "require('/another/absolute/path');"
    )

    result = extract_from_javascript(content)

    assert [path.type for path in result] == [PathType.URL, PathType.ABSOLUTE]


def test_protocol_relative_specifier_is_not_a_url() -> None:
    assert classify("//cdn.example.com/lib.js", MODULE_RULES) is PathType.ABSOLUTE


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("./a", True),
        ("../a", True),
        ("/a", True),
        ("C:/lib/a.js", True),
        ("https://x.io/a.js", True),
        ("react", False),
        ("@scope/pkg", False),
        (".", False),
    ],
)
def test_is_module_path(value: str, expected: bool) -> None:
    assert is_module_path(value) is expected


def test_empty_and_whitespace_content() -> None:
    assert extract_from_javascript("") == []
    assert extract_from_javascript("   ") == []
