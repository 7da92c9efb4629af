"""
Comparison routes for DocCompare.

Compares posted documents or uploaded JSON files in any diff mode.
"""
import html
import logging
import math
from typing import Optional

from fastapi import APIRouter, UploadFile, File, HTTPException, Depends

from config import settings
from core import (
    DiffMode,
    diff_strings,
    format_report,
    parse_json_content
)
from api.schemas import (
    ComparisonRequest,
    ComparisonResponse,
    InlineDiffResponse,
    CacheStatsResponse
)
from services.cache import ComparisonCache

logger = logging.getLogger(__name__)

router = APIRouter()

_cache = ComparisonCache(
    max_size=settings.COMPARE_CACHE_SIZE,
    char_diff_timeout=settings.CHAR_DIFF_TIMEOUT,
    timestamp_field=settings.TIMESTAMP_FIELD
)


def get_comparison_cache() -> ComparisonCache:
    """Dependency for the shared view cache."""
    return _cache


def _resolve_mode(mode: Optional[DiffMode]) -> DiffMode:
    if mode is not None:
        return mode
    try:
        return DiffMode(settings.DEFAULT_MODE)
    except ValueError:
        logger.warning(f"Invalid DEFAULT_MODE '{settings.DEFAULT_MODE}', using line mode")
        return DiffMode.LINE


def _contains_non_finite(value) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_contains_non_finite(item) for item in value.values())
    if isinstance(value, list):
        return any(_contains_non_finite(item) for item in value)
    return False


def _check_document_count(count: int):
    if count > settings.MAX_DOCUMENTS:
        raise HTTPException(
            status_code=400,
            detail=f"Too many documents: {count} (maximum {settings.MAX_DOCUMENTS})"
        )


@router.post("", response_model=ComparisonResponse, response_model_exclude_unset=True)
def compare_documents(
    request: ComparisonRequest,
    cache: ComparisonCache = Depends(get_comparison_cache)
):
    """
    Compare posted documents and return the rendered view for one mode.

    Declared sync so the diff runs in the threadpool, not on the event loop.
    """
    _check_document_count(len(request.documents))

    if _contains_non_finite(request.documents):
        raise HTTPException(status_code=400, detail="NaN and Infinity are not valid JSON numbers")

    if request.labels is not None and len(request.labels) != len(request.documents):
        raise HTTPException(status_code=400, detail="labels must match the number of documents")

    result = cache.compare(
        request.documents,
        mode=_resolve_mode(request.mode),
        show_differences_only=request.show_differences_only,
        ignore_array_order=request.ignore_array_order,
        labels=request.labels
    )

    return ComparisonResponse.model_validate(result.to_dict())


@router.post("/files")
def compare_files(
    files: list[UploadFile] = File(...),
    mode: Optional[DiffMode] = None,
    show_differences_only: bool = False,
    ignore_array_order: bool = False,
    split_arrays: bool = False,
    cache: ComparisonCache = Depends(get_comparison_cache)
):
    """
    Compare uploaded JSON files, in upload order.
    """
    parsed = []
    for upload in files:
        if not upload.filename or not upload.filename.lower().endswith('.json'):
            raise HTTPException(status_code=400, detail=f"{upload.filename} must be JSON")

        content = upload.file.read()
        try:
            text = content.decode('utf-8')
        except UnicodeDecodeError:
            raise HTTPException(status_code=400, detail=f"{upload.filename} is not UTF-8 text")

        documents = parse_json_content(text, upload.filename, split_arrays=split_arrays)
        if documents is None:
            raise HTTPException(status_code=400, detail=f"Invalid JSON in {upload.filename}")
        parsed.extend(documents)

    _check_document_count(len(parsed))

    result = cache.compare(
        [p.document for p in parsed],
        mode=_resolve_mode(mode),
        show_differences_only=show_differences_only,
        ignore_array_order=ignore_array_order,
        labels=[p.label for p in parsed]
    )

    response = result.to_dict()
    response["files"] = [upload.filename for upload in files]
    response["report"] = format_report(
        result,
        sources=[p.filename for p in parsed],
        app_version=settings.APP_VERSION
    )
    return response


@router.post("/inline-diff", response_model=InlineDiffResponse)
def get_inline_diff(old_value: str, new_value: str):
    """
    Character diff of two string values.

    Returns the parts plus HTML with the removed characters highlighted in
    the old value and the added characters in the new one.
    """
    parts = diff_strings(old_value, new_value, timeout=settings.CHAR_DIFF_TIMEOUT)

    old_html = []
    new_html = []
    for part in parts:
        escaped = html.escape(part.value)
        if part.removed:
            old_html.append(f"<span class='hl-removed'>{escaped}</span>")
        elif part.added:
            new_html.append(f"<span class='hl-added'>{escaped}</span>")
        else:
            old_html.append(escaped)
            new_html.append(escaped)

    return InlineDiffResponse(
        parts=[part.to_dict() for part in parts],
        old_html="".join(old_html),
        new_html="".join(new_html)
    )


@router.get("/cache", response_model=CacheStatsResponse)
async def get_cache_stats(cache: ComparisonCache = Depends(get_comparison_cache)):
    """Hit/miss counters of the view cache."""
    return cache.stats()


@router.delete("/cache", response_model=CacheStatsResponse)
async def clear_cache(cache: ComparisonCache = Depends(get_comparison_cache)):
    """Drop all cached views."""
    cache.clear()
    logger.info("Comparison cache cleared")
    return cache.stats()
