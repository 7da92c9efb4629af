"""
Age ranking of compared documents.

Documents carry their last-modified time as epoch seconds in ``_ts``.
Documents are ranked oldest to newest by distinct timestamp and given a
label and human-readable age. Documents without a timestamp are left
unranked (rank 0).
"""
import math
import time
from datetime import datetime, timezone
from typing import Any, Optional, Union

from core.models import AgeInfo, AgeLabel

TIMESTAMP_FIELD = "_ts"

Timestamp = Union[int, float]


def extract_timestamp(document: Any, field: str = TIMESTAMP_FIELD) -> Optional[Timestamp]:
    """Return the document's numeric timestamp, or None if absent or not a number."""
    if not isinstance(document, dict):
        return None
    value = document.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def format_timestamp(ts: Timestamp) -> Optional[str]:
    """Format epoch seconds as ``YYYY-MM-DD HH:MM:SS UTC``; None if out of range."""
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    except (OverflowError, OSError, ValueError):
        return None


def relative_age(ts: Timestamp, now: Optional[float] = None) -> str:
    """
    Largest whole unit elapsed since ``ts``, e.g. "3d ago", "5h ago", "12s ago".

    Future timestamps read as "0s ago".
    """
    if now is None:
        now = time.time()

    seconds = int(max(0.0, now - ts))
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return f"{seconds}s ago"


def rank_ages(
    documents: list,
    now: Optional[float] = None,
    field: str = TIMESTAMP_FIELD
) -> list[AgeInfo]:
    """
    Rank documents by timestamp.

    Rank is the 1-based position of the document's timestamp among the
    distinct timestamps present. Labels need at least two timestamped
    documents: the minimum is OLDEST, the maximum NEWEST, the rest MIDDLE.
    """
    timestamps = [extract_timestamp(doc, field) for doc in documents]
    valid = [ts for ts in timestamps if ts is not None]

    if not valid:
        return [AgeInfo() for _ in documents]

    if now is None:
        now = time.time()

    distinct = sorted(set(valid))
    ranks = {ts: index + 1 for index, ts in enumerate(distinct)}
    oldest, newest = distinct[0], distinct[-1]

    infos = []
    for ts in timestamps:
        if ts is None:
            infos.append(AgeInfo())
            continue

        label = None
        if len(valid) > 1:
            if ts == oldest:
                label = AgeLabel.OLDEST
            elif ts == newest:
                label = AgeLabel.NEWEST
            else:
                label = AgeLabel.MIDDLE

        infos.append(AgeInfo(
            timestamp=ts,
            rank=ranks[ts],
            label=label,
            formatted_date=format_timestamp(ts),
            relative_age=relative_age(ts, now)
        ))

    return infos
