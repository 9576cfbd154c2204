"""Path extraction from structured and semi-structured documents."""

from .base import (
    DOCUMENT_START,
    ExtractedPath,
    ExtractionResult,
    PathExtractor,
    PathType,
    SourcePosition,
)
from .classify import (
    COMPACT_PATH_LIKE,
    GENERIC_RULES,
    JSON_PATH_LIKE,
    MARKUP_RULES,
    MODULE_RULES,
    SPACED_PATH_LIKE,
    STYLESHEET_RULES,
    ClassifierRules,
    PathLikePredicate,
    classify,
    is_path_like,
)
from .collect import TreeWalker, collect_paths
from .extract import extract_file, extract_paths, guess_language_id
from .registry import (
    FORMAT_CATEGORIES,
    SUPPORTED_FORMATS,
    ExtractorRegistry,
    determine_format_category,
    registry,
)

__all__ = [
    "COMPACT_PATH_LIKE",
    "ClassifierRules",
    "DOCUMENT_START",
    "ExtractedPath",
    "ExtractionResult",
    "ExtractorRegistry",
    "FORMAT_CATEGORIES",
    "GENERIC_RULES",
    "JSON_PATH_LIKE",
    "MARKUP_RULES",
    "MODULE_RULES",
    "PathExtractor",
    "PathLikePredicate",
    "PathType",
    "SPACED_PATH_LIKE",
    "STYLESHEET_RULES",
    "SUPPORTED_FORMATS",
    "SourcePosition",
    "TreeWalker",
    "classify",
    "collect_paths",
    "determine_format_category",
    "extract_file",
    "extract_paths",
    "guess_language_id",
    "is_path_like",
    "registry",
]
