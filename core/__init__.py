# DocCompare v1.2.0
"""
Core package for DocCompare.
Contains the document comparison engine and document loading utilities.
"""
from core.normalizer import normalize, canonical_json, json_equal, is_json_value
from core.paths import extract_paths, array_descriptor, ROOT_PATH
from core.line_diff import format_document, diff_lines, diff_text_lines, count_differences
from core.char_diff import diff_characters, diff_strings, count_character_differences
from core.semantic_diff import diff_semantic, count_semantic_differences
from core.age import rank_ages, extract_timestamp, format_timestamp, relative_age, TIMESTAMP_FIELD
from core.models import (
    DiffLine,
    CharDiffPart,
    CharDiffLine,
    SemanticEntry,
    SemanticChangeType,
    AgeInfo,
    AgeLabel
)
from core.comparison import (
    DiffMode,
    ComparisonView,
    ComparisonResult,
    compute_view,
    compare_documents,
    attach_ages,
    filter_differences,
    document_label
)
from core.file_parser import (
    ParsedDocument,
    parse_json_file,
    parse_json_content,
    parse_json_documents
)
from core.report import format_report

__all__ = [
    "normalize",
    "canonical_json",
    "json_equal",
    "is_json_value",
    "extract_paths",
    "array_descriptor",
    "ROOT_PATH",
    "format_document",
    "diff_lines",
    "diff_text_lines",
    "count_differences",
    "diff_characters",
    "diff_strings",
    "count_character_differences",
    "diff_semantic",
    "count_semantic_differences",
    "rank_ages",
    "extract_timestamp",
    "format_timestamp",
    "relative_age",
    "TIMESTAMP_FIELD",
    "DiffLine",
    "CharDiffPart",
    "CharDiffLine",
    "SemanticEntry",
    "SemanticChangeType",
    "AgeInfo",
    "AgeLabel",
    "DiffMode",
    "ComparisonView",
    "ComparisonResult",
    "compute_view",
    "compare_documents",
    "attach_ages",
    "filter_differences",
    "document_label",
    "ParsedDocument",
    "parse_json_file",
    "parse_json_content",
    "parse_json_documents",
    "format_report"
]
