"""
Path-based semantic diff against the base document.

Every document is flattened with the path extractor and each path is
classified against the first document's paths. Unlike the line and
character views this ignores formatting and key order, and with
``ignore_array_order`` it also ignores the order of array elements.
"""
from core.models import SemanticChangeType, SemanticEntry
from core.normalizer import json_equal
from core.paths import extract_paths


def diff_semantic(documents: list, ignore_array_order: bool = False) -> list[list[SemanticEntry]]:
    """
    Classify every path of every document against the base.

    The base document gets one UNCHANGED entry per path (context view).
    Each other document gets REMOVED/UNCHANGED/CHANGED for every base path
    and ADDED for paths only it has, sorted by path.
    """
    if not documents:
        return []

    path_maps = [extract_paths(doc, "", ignore_array_order) for doc in documents]
    base = path_maps[0]

    result = [[
        SemanticEntry(path=path, change_type=SemanticChangeType.UNCHANGED, old_value=value)
        for path, value in base.items()
    ]]

    for paths in path_maps[1:]:
        entries = []
        for path, base_value in base.items():
            if path not in paths:
                entries.append(SemanticEntry(
                    path=path,
                    change_type=SemanticChangeType.REMOVED,
                    old_value=base_value
                ))
            elif json_equal(base_value, paths[path]):
                entries.append(SemanticEntry(
                    path=path,
                    change_type=SemanticChangeType.UNCHANGED,
                    old_value=base_value
                ))
            else:
                entries.append(SemanticEntry(
                    path=path,
                    change_type=SemanticChangeType.CHANGED,
                    old_value=base_value,
                    new_value=paths[path]
                ))

        for path, value in paths.items():
            if path not in base:
                entries.append(SemanticEntry(
                    path=path,
                    change_type=SemanticChangeType.ADDED,
                    new_value=value
                ))

        entries.sort(key=lambda entry: entry.path)
        result.append(entries)

    return result


def count_semantic_differences(semantic_diff: list[list[SemanticEntry]]) -> int:
    """Non-UNCHANGED entries over all documents except the base."""
    return sum(
        1
        for entries in semantic_diff[1:]
        for entry in entries
        if entry.change_type != SemanticChangeType.UNCHANGED
    )
