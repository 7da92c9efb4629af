"""
Pydantic schemas for DocCompare API.
"""
from typing import Optional, Any, Union
from pydantic import BaseModel, Field

from core.comparison import DiffMode


# ============================================================
# REQUEST SCHEMAS
# ============================================================

class ComparisonRequest(BaseModel):
    documents: list[Any] = Field(default_factory=list, description="Documents to compare; the first is the base")
    mode: Optional[DiffMode] = None  # Server default when omitted
    show_differences_only: bool = False
    ignore_array_order: bool = False  # Semantic mode only
    labels: Optional[list[str]] = None


# ============================================================
# ROW SCHEMAS
# ============================================================

class DiffLineSchema(BaseModel):
    text: str
    is_different: bool
    line_number: int


class CharDiffPartSchema(BaseModel):
    value: str
    added: bool = False
    removed: bool = False


class CharDiffLineSchema(BaseModel):
    line_number: int
    is_different: bool
    parts: list[CharDiffPartSchema]


class SemanticEntrySchema(BaseModel):
    path: str
    change_type: str
    # Absent (not null) when the change type carries no such value
    old_value: Optional[Any] = None
    new_value: Optional[Any] = None


class AgeInfoSchema(BaseModel):
    timestamp: Optional[Union[int, float]] = None
    rank: int = 0
    label: Optional[str] = None
    formatted_date: Optional[str] = None
    relative_age: Optional[str] = None


# ============================================================
# RESPONSE SCHEMAS
# ============================================================

class ComparisonResponse(BaseModel):
    mode: DiffMode
    show_differences_only: bool
    ignore_array_order: bool
    difference_count: int
    is_identical: bool
    document_count: int
    views: list[list[Union[SemanticEntrySchema, CharDiffLineSchema, DiffLineSchema]]]
    ages: list[AgeInfoSchema]
    labels: list[str]


class InlineDiffResponse(BaseModel):
    parts: list[CharDiffPartSchema]
    old_html: str
    new_html: str


class CacheStatsResponse(BaseModel):
    size: int
    max_size: int
    hits: int
    misses: int
