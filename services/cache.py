"""
Memoization of comparison views.

The engine is pure, so a computed view can be reused for as long as the
documents, mode and flags stay the same. Ages are not cached: they depend
on the clock and are recomputed on every call.
"""
import hashlib
import json
import logging
import threading
from collections import OrderedDict
from typing import Optional

from core.age import TIMESTAMP_FIELD
from core.comparison import ComparisonResult, ComparisonView, DiffMode, attach_ages, compute_view

logger = logging.getLogger(__name__)


def make_cache_key(
    documents: list,
    mode: DiffMode,
    show_differences_only: bool,
    ignore_array_order: bool
) -> str:
    """
    Hash of the documents and view options.

    Key order is part of the key: the line and character views depend on
    the original order of object keys.
    """
    payload = json.dumps(
        {
            "documents": documents,
            "mode": DiffMode(mode).value,
            "show_differences_only": bool(show_differences_only),
            "ignore_array_order": bool(ignore_array_order)
        },
        ensure_ascii=False,
        separators=(',', ':')
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class ComparisonCache:
    """
    Thread-safe LRU of ComparisonView keyed by make_cache_key.

    Usage:
        cache = ComparisonCache(max_size=128)
        result = cache.compare(documents, DiffMode.SEMANTIC, ignore_array_order=True)
    """

    def __init__(self, max_size: int = 128, char_diff_timeout: float = 0.0, timestamp_field: str = TIMESTAMP_FIELD):
        self.max_size = max_size
        self.char_diff_timeout = char_diff_timeout
        self.timestamp_field = timestamp_field

        self._views: "OrderedDict[str, ComparisonView]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get_view(
        self,
        documents: list,
        mode: DiffMode = DiffMode.LINE,
        show_differences_only: bool = False,
        ignore_array_order: bool = False
    ) -> ComparisonView:
        """Return the cached view for these inputs, computing it on a miss."""
        key = make_cache_key(documents, mode, show_differences_only, ignore_array_order)

        with self._lock:
            view = self._views.get(key)
            if view is not None:
                self._views.move_to_end(key)
                self._hits += 1
                logger.debug(f"Comparison cache hit: {key[:12]}")
                return view
            self._misses += 1

        view = compute_view(
            documents,
            mode=mode,
            show_differences_only=show_differences_only,
            ignore_array_order=ignore_array_order,
            char_diff_timeout=self.char_diff_timeout
        )

        if self.max_size > 0:
            with self._lock:
                self._views[key] = view
                self._views.move_to_end(key)
                while len(self._views) > self.max_size:
                    self._views.popitem(last=False)

        return view

    def compare(
        self,
        documents: list,
        mode: DiffMode = DiffMode.LINE,
        show_differences_only: bool = False,
        ignore_array_order: bool = False,
        now: Optional[float] = None,
        labels: Optional[list[str]] = None
    ) -> ComparisonResult:
        """Cached equivalent of core.comparison.compare_documents."""
        view = self.get_view(documents, mode, show_differences_only, ignore_array_order)
        return attach_ages(view, documents, now=now, labels=labels, timestamp_field=self.timestamp_field)

    def clear(self):
        with self._lock:
            self._views.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> dict:
        with self._lock:
            return {
                "size": len(self._views),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses
            }
