"""
Positional line diff across any number of documents.

Documents are pretty-printed and compared line position by line
position. A position is "different" unless every document has exactly
the same text there. There is no alignment of inserted or deleted lines:
one extra line shifts everything after it, and every later position is
reported as different in all documents.
"""
import json
from typing import Any

from core.models import DiffLine


def format_document(document: Any) -> str:
    """Pretty-print a document with 2-space indentation and original key order."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def diff_lines(documents: list) -> list[list[DiffLine]]:
    """Serialize each document and compare the results line by line."""
    return diff_text_lines([format_document(doc) for doc in documents])


def diff_text_lines(texts: list[str]) -> list[list[DiffLine]]:
    """
    Compare already-serialized texts position by position.

    Returns one list of DiffLine per text, all of the same length.
    Missing lines in shorter texts read as empty strings.
    """
    all_lines = [text.split("\n") for text in texts]
    if not all_lines:
        return []

    max_lines = max(len(lines) for lines in all_lines)
    result = [[] for _ in all_lines]

    for index in range(max_lines):
        at_position = [lines[index] if index < len(lines) else "" for lines in all_lines]
        first = at_position[0]
        is_different = any(line != first for line in at_position)

        for doc_index, text in enumerate(at_position):
            result[doc_index].append(DiffLine(
                text=text,
                is_different=is_different,
                line_number=index + 1
            ))

    return result


def count_differences(line_diff: list[list[DiffLine]]) -> int:
    """Number of differing line positions (the same for every document)."""
    if not line_diff:
        return 0
    return sum(1 for line in line_diff[0] if line.is_different)
