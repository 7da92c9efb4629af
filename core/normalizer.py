"""
Canonical form of JSON values for order-insensitive comparison.

Objects are re-emitted with their keys sorted and arrays with their
elements sorted by canonical JSON text, recursively. Two values that
differ only in key order or array order share a canonical form.

Values are plain decoded JSON: None, bool, int, float, str, list and
dict with str keys. Anything else is a programming error and raises
TypeError.
"""
import json
from typing import Any


def is_json_value(value: Any) -> bool:
    """Shallow check that a value belongs to the JSON data model."""
    return value is None or isinstance(value, (bool, int, float, str, list, dict))


def normalize(value: Any) -> Any:
    """
    Return the canonical form of a JSON value.

    Floats with an integral value become ints, since JSON does not
    distinguish 1 from 1.0. Other scalars come back unchanged. The result
    is idempotent: normalize(normalize(v)) == normalize(v).
    """
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        return {key: normalize(value[key]) for key in sorted(_check_keys(value))}
    if isinstance(value, list):
        items = [normalize(item) for item in value]
        # sorted() is stable, so equal serializations keep their relative order
        return sorted(items, key=_dumps)
    raise TypeError(f"Unsupported JSON value type: {type(value).__name__}")


def canonical_json(value: Any) -> str:
    """Compact JSON text of the canonical form of a value."""
    return _dumps(normalize(value))


def json_equal(left: Any, right: Any) -> bool:
    """
    Structural JSON equality.

    Booleans never equal numbers, ints and floats compare as JSON numbers,
    object key order is irrelevant and arrays are compared in order.
    """
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, list) and isinstance(right, list):
        if len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, dict) and isinstance(right, dict):
        if set(_check_keys(left)) != set(_check_keys(right)):
            return False
        return all(json_equal(left[key], right[key]) for key in left)

    for side in (left, right):
        if not is_json_value(side):
            raise TypeError(f"Unsupported JSON value type: {type(side).__name__}")
    # Both are JSON values of different kinds
    return False


def _check_keys(obj: dict):
    for key in obj:
        if not isinstance(key, str):
            raise TypeError(f"JSON object keys must be strings, got {type(key).__name__}")
    return obj.keys()


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(',', ':'))
