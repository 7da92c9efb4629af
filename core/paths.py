"""
Flatten a JSON value into a mapping of path -> leaf value.

Paths use dotted keys and bracketed indexes (``config.ports[2].name``).
Arrays also get a synthetic descriptor entry at their own path so that
a change in cardinality is visible even when every element matches.

With ``ignore_array_order`` the elements of every array are visited in
canonical order and indexed by their sorted position. Two arrays holding
the same elements in a different order then produce identical paths.
Under that mode an index is a structural position, not a stable
identifier for an element: arrays of different lengths at the same path
can shift every index after the first mismatch.
"""
from typing import Any

from core.normalizer import canonical_json

ROOT_PATH = "(root)"


def array_descriptor(length: int) -> str:
    return f"[Array({length})]"


def extract_paths(value: Any, prefix: str = "", ignore_array_order: bool = False) -> dict:
    """
    Return an ordered dict of every leaf path in ``value``.

    Object keys are visited in sorted order. Objects produce no entry of
    their own, only their descendants do. On a path collision the later
    write wins.
    """
    paths = {}
    _extract(value, prefix, ignore_array_order, paths)
    return paths


def _extract(value: Any, prefix: str, ignore_array_order: bool, paths: dict):
    if value is None or isinstance(value, (bool, int, float, str)):
        paths[prefix or ROOT_PATH] = value
        return

    if isinstance(value, dict):
        for key in sorted(value.keys()):
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be strings, got {type(key).__name__}")
            child = f"{prefix}.{key}" if prefix else key
            _extract(value[key], child, ignore_array_order, paths)
        return

    if isinstance(value, list):
        if ignore_array_order:
            paths[prefix or ROOT_PATH] = canonical_json(value)
            keyed = sorted(
                ((canonical_json(item), index, item) for index, item in enumerate(value)),
                key=lambda entry: (entry[0], entry[1])
            )
            for position, (_, _, item) in enumerate(keyed):
                _extract(item, f"{prefix}[{position}]", ignore_array_order, paths)
        else:
            paths[prefix or ROOT_PATH] = array_descriptor(len(value))
            for index, item in enumerate(value):
                _extract(item, f"{prefix}[{index}]", ignore_array_order, paths)
        return

    raise TypeError(f"Unsupported JSON value type: {type(value).__name__}")
