"""Per-format extractors; importing this package registers all of them."""

from .css import CssExtractor, css_extractor, extract_from_css
from .csv import CsvExtractor, csv_extractor, extract_from_csv
from .dotenv import DotenvExtractor, dotenv_extractor, extract_from_dotenv
from .html import HtmlExtractor, extract_from_html, html_extractor
from .javascript import JavaScriptExtractor, extract_from_javascript, javascript_extractor
from .json import JsonExtractor, extract_from_json, json_extractor
from .toml import TomlExtractor, extract_from_toml, toml_extractor

__all__ = [
    "CssExtractor",
    "CsvExtractor",
    "DotenvExtractor",
    "HtmlExtractor",
    "JavaScriptExtractor",
    "JsonExtractor",
    "TomlExtractor",
    "css_extractor",
    "csv_extractor",
    "dotenv_extractor",
    "extract_from_css",
    "extract_from_csv",
    "extract_from_dotenv",
    "extract_from_html",
    "extract_from_javascript",
    "extract_from_json",
    "extract_from_toml",
    "html_extractor",
    "javascript_extractor",
    "json_extractor",
    "toml_extractor",
]
