"""Validation, analysis, resolution, and safety checks over path strings."""

from .analysis import analyze_paths, analyze_validation
from .models import (
    AnalysisResult,
    CommonPattern,
    PatternAnalysis,
    ValidationAnalysis,
    ValidationResult,
    ValidationStatus,
)
from .paths import (
    FormatValidation,
    PathComponents,
    analyze_path_patterns,
    detect_path_type,
    get_file_extension,
    get_path_components,
    get_path_depth,
    is_absolute_path,
    is_directory_path,
    is_file_path,
    is_path_safe,
    is_relative_path,
    is_valid_path,
    join_relative_path,
    normalize_path,
    validate_path_format,
)
from .performance import (
    OperationMeter,
    PerformanceCheck,
    PerformanceMetrics,
    PerformanceMonitor,
    check_thresholds,
    format_bytes,
    format_duration,
    format_throughput,
)
from .resolver import (
    PathResolutionOptions,
    PathResolver,
    ResolutionCache,
    WorkspaceFolder,
    get_workspace_folder_for_path,
    resolve_path_canonical,
    resolve_path_enhanced,
)
from .safety import (
    SafetyResult,
    check_content_safety,
    count_complex_patterns,
    estimate_path_count,
    should_cancel_operation,
)
from .validation import FilesystemProbe, validate_paths

__all__ = [
    "AnalysisResult",
    "CommonPattern",
    "FilesystemProbe",
    "FormatValidation",
    "OperationMeter",
    "PathComponents",
    "PathResolutionOptions",
    "PathResolver",
    "PatternAnalysis",
    "PerformanceCheck",
    "PerformanceMetrics",
    "PerformanceMonitor",
    "ResolutionCache",
    "SafetyResult",
    "ValidationAnalysis",
    "ValidationResult",
    "ValidationStatus",
    "WorkspaceFolder",
    "analyze_path_patterns",
    "analyze_paths",
    "analyze_validation",
    "check_content_safety",
    "check_thresholds",
    "count_complex_patterns",
    "detect_path_type",
    "estimate_path_count",
    "format_bytes",
    "format_duration",
    "format_throughput",
    "get_file_extension",
    "get_path_components",
    "get_path_depth",
    "get_workspace_folder_for_path",
    "is_absolute_path",
    "is_directory_path",
    "is_file_path",
    "is_path_safe",
    "is_relative_path",
    "is_valid_path",
    "join_relative_path",
    "normalize_path",
    "resolve_path_canonical",
    "resolve_path_enhanced",
    "should_cancel_operation",
    "validate_paths",
]
