"""
Character-level diff of every document against the base document.

The first document is the base. Each line of every other document is
compared with the base line at the same position; identical lines come
back as a single unchanged part, differing lines are run through
diff-match-patch and come back as ordered added/removed/unchanged parts.
Non-base documents are never compared with each other.
"""
from diff_match_patch import diff_match_patch

from core.line_diff import format_document
from core.models import CharDiffPart


def diff_strings(old: str, new: str, timeout: float = 0.0) -> list[CharDiffPart]:
    """
    Character diff of two strings.

    Args:
        old: Base text
        new: Text compared against the base
        timeout: diff-match-patch time budget in seconds, 0 for unlimited.
                 A limited budget can return a coarser (still valid) diff.

    Returns:
        Ordered parts; joining unchanged+removed gives ``old``,
        unchanged+added gives ``new``.
    """
    if old == new:
        return [CharDiffPart(value=old)]

    dmp = diff_match_patch()
    dmp.Diff_Timeout = timeout
    diffs = dmp.diff_main(old, new, False)

    parts = []
    for op, text in diffs:
        if op == dmp.DIFF_INSERT:
            parts.append(CharDiffPart(value=text, added=True))
        elif op == dmp.DIFF_DELETE:
            parts.append(CharDiffPart(value=text, removed=True))
        else:
            parts.append(CharDiffPart(value=text))
    return parts


def diff_characters(documents: list, timeout: float = 0.0) -> list[list[list[CharDiffPart]]]:
    """
    Per document, per line, the parts of that line relative to the base.

    The base document's own lines are each a single unchanged part. Other
    documents cover max(len(base), len(own)) lines, missing lines read as
    empty strings.
    """
    if not documents:
        return []

    all_lines = [format_document(doc).split("\n") for doc in documents]
    base_lines = all_lines[0]

    result = [[[CharDiffPart(value=line)] for line in base_lines]]

    for lines in all_lines[1:]:
        doc_parts = []
        for index in range(max(len(base_lines), len(lines))):
            base_line = base_lines[index] if index < len(base_lines) else ""
            line = lines[index] if index < len(lines) else ""
            if base_line == line:
                doc_parts.append([CharDiffPart(value=line)])
            else:
                doc_parts.append(diff_strings(base_line, line, timeout))
        result.append(doc_parts)

    return result


def count_character_differences(char_diff: list[list[list[CharDiffPart]]]) -> int:
    """Lines with at least one added or removed part, summed over non-base documents."""
    return sum(
        1
        for doc_parts in char_diff[1:]
        for line_parts in doc_parts
        if any(not part.is_unchanged for part in line_parts)
    )
