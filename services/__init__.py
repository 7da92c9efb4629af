# DocCompare v1.2.0
"""
Services package for DocCompare.
Contains caller-side memoization and file watching around the engine.
"""
from services.cache import ComparisonCache, make_cache_key
from services.watcher import DocumentWatcher, DocumentFileHandler

__all__ = [
    "ComparisonCache",
    "make_cache_key",
    "DocumentWatcher",
    "DocumentFileHandler"
]
