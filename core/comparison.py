"""
DocCompare Comparison Engine

Entry point that ties the individual differs together. Given an ordered
list of documents and a diff mode, it runs only the computation that
mode needs and returns one renderable list per document, the difference
count and the age ranking.

Every function here is pure. Memoization belongs to the caller
(see services.cache).
"""
import logging
from typing import Any, Optional
from dataclasses import dataclass, field
from enum import Enum

from core.age import TIMESTAMP_FIELD, rank_ages
from core.char_diff import count_character_differences, diff_characters
from core.line_diff import count_differences, diff_lines
from core.models import AgeInfo, CharDiffLine, SemanticChangeType
from core.semantic_diff import count_semantic_differences, diff_semantic

logger = logging.getLogger(__name__)


class DiffMode(str, Enum):
    LINE = "line"
    CHARACTER = "character"
    SEMANTIC = "semantic"


@dataclass(frozen=True)
class ComparisonView:
    """
    Rendered rows of one diff mode, per document, plus the unfiltered count.

    Rows are stored as a tuple of tuples so a cached view can be shared.
    """
    mode: DiffMode
    difference_count: int
    views: tuple = ()
    show_differences_only: bool = False
    ignore_array_order: bool = False

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "show_differences_only": self.show_differences_only,
            "ignore_array_order": self.ignore_array_order,
            "difference_count": self.difference_count,
            "views": [[row.to_dict() for row in rows] for rows in self.views]
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Full comparison of a document list: rendered view, ages and pane labels."""
    view: ComparisonView
    ages: list[AgeInfo] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)

    @property
    def mode(self) -> DiffMode:
        return self.view.mode

    @property
    def difference_count(self) -> int:
        return self.view.difference_count

    @property
    def is_identical(self) -> bool:
        return self.view.difference_count == 0

    @property
    def document_count(self) -> int:
        return len(self.view.views)

    def to_dict(self) -> dict:
        result = self.view.to_dict()
        result["is_identical"] = self.is_identical
        result["document_count"] = self.document_count
        result["ages"] = [age.to_dict() for age in self.ages]
        result["labels"] = list(self.labels)
        return result


def compute_view(
    documents: list,
    mode: DiffMode = DiffMode.LINE,
    show_differences_only: bool = False,
    ignore_array_order: bool = False,
    char_diff_timeout: float = 0.0
) -> ComparisonView:
    """
    Compute the rows and difference count for one diff mode.

    The count always reflects the unfiltered rows, even when
    ``show_differences_only`` trims the returned rows.

    Raises:
        ValueError: if ``mode`` is not a known diff mode
    """
    mode = DiffMode(mode)

    if mode == DiffMode.LINE:
        views = diff_lines(documents)
        count = count_differences(views)
    elif mode == DiffMode.CHARACTER:
        char_diff = diff_characters(documents, timeout=char_diff_timeout)
        count = count_character_differences(char_diff)
        views = [
            [CharDiffLine(line_number=index + 1, parts=tuple(parts)) for index, parts in enumerate(lines)]
            for lines in char_diff
        ]
    else:
        views = diff_semantic(documents, ignore_array_order=ignore_array_order)
        count = count_semantic_differences(views)

    if show_differences_only:
        views = filter_differences(views, mode)

    return ComparisonView(
        mode=mode,
        difference_count=count,
        views=tuple(tuple(rows) for rows in views),
        show_differences_only=show_differences_only,
        ignore_array_order=ignore_array_order
    )


def filter_differences(views: list, mode: DiffMode) -> list:
    """
    Keep only the rows that show a difference.

    Line rows carry their own flag. Character rows are kept per line index
    across all documents so the panes stay aligned. Semantic rows of the
    base document are kept when their path differs in any other document.
    """
    mode = DiffMode(mode)

    if mode == DiffMode.LINE:
        return [[line for line in rows if line.is_different] for rows in views]

    if mode == DiffMode.CHARACTER:
        differing = {
            row.line_number
            for rows in views[1:]
            for row in rows
            if row.is_different
        }
        return [[row for row in rows if row.line_number in differing] for rows in views]

    if not views:
        return []
    differing_paths = {
        entry.path
        for entries in views[1:]
        for entry in entries
        if entry.change_type != SemanticChangeType.UNCHANGED
    }
    base = [entry for entry in views[0] if entry.path in differing_paths]
    others = [
        [entry for entry in entries if entry.change_type != SemanticChangeType.UNCHANGED]
        for entries in views[1:]
    ]
    return [base] + others


def compare_documents(
    documents: list,
    mode: DiffMode = DiffMode.LINE,
    show_differences_only: bool = False,
    ignore_array_order: bool = False,
    now: Optional[float] = None,
    labels: Optional[list[str]] = None,
    timestamp_field: str = TIMESTAMP_FIELD,
    char_diff_timeout: float = 0.0
) -> ComparisonResult:
    """
    Main entry point for comparing documents.

    Args:
        documents: Decoded JSON documents; the first is the base
        mode: Which diff view to compute
        show_differences_only: Trim rows that show no difference
        ignore_array_order: Semantic mode only, compare arrays as multisets
        now: Epoch seconds used for relative ages (defaults to the clock)
        labels: Pane titles; derived from id/_id when omitted
        timestamp_field: Field holding epoch seconds

    Returns:
        ComparisonResult with the rendered view, ages and labels
    """
    view = compute_view(
        documents,
        mode=mode,
        show_differences_only=show_differences_only,
        ignore_array_order=ignore_array_order,
        char_diff_timeout=char_diff_timeout
    )
    logger.debug(
        "Compared %d document(s) in %s mode: %d difference(s)",
        len(documents), view.mode.value, view.difference_count
    )
    return attach_ages(view, documents, now=now, labels=labels, timestamp_field=timestamp_field)


def attach_ages(
    view: ComparisonView,
    documents: list,
    now: Optional[float] = None,
    labels: Optional[list[str]] = None,
    timestamp_field: str = TIMESTAMP_FIELD
) -> ComparisonResult:
    """Combine a computed view with fresh age ranking and pane labels."""
    if labels is None:
        labels = [document_label(doc) for doc in documents]
    elif len(labels) != len(documents):
        raise ValueError(f"Expected {len(documents)} labels, got {len(labels)}")

    return ComparisonResult(
        view=view,
        ages=rank_ages(documents, now=now, field=timestamp_field),
        labels=list(labels)
    )


def document_label(document: Any, fallback: str = "Document") -> str:
    """Pane title for a document: its ``id``, else ``_id``, else the fallback."""
    if isinstance(document, dict):
        for key in ("id", "_id"):
            value = document.get(key)
            if value:
                return str(value)
    return fallback
