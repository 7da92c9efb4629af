"""
Value records produced by the document comparison engine.

All records are created fresh on every comparison and never mutated.
"""
from typing import Any, Optional, Union
from dataclasses import dataclass, field
from enum import Enum


class SemanticChangeType(str, Enum):
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    ADDED = "added"
    REMOVED = "removed"


class AgeLabel(str, Enum):
    OLDEST = "oldest"
    NEWEST = "newest"
    MIDDLE = "middle"


@dataclass(frozen=True)
class DiffLine:
    """One line of a pretty-printed document in the positional line diff."""
    text: str
    is_different: bool
    line_number: int

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "is_different": self.is_different,
            "line_number": self.line_number
        }


@dataclass(frozen=True)
class CharDiffPart:
    """A run of characters; neither added nor removed means unchanged."""
    value: str
    added: bool = False
    removed: bool = False

    @property
    def is_unchanged(self) -> bool:
        return not self.added and not self.removed

    def to_dict(self) -> dict:
        return {"value": self.value, "added": self.added, "removed": self.removed}


@dataclass(frozen=True)
class CharDiffLine:
    """A line of the character diff, as the ordered parts that make it up."""
    line_number: int
    parts: tuple = field(default_factory=tuple)

    @property
    def is_different(self) -> bool:
        return any(not part.is_unchanged for part in self.parts)

    @property
    def text(self) -> str:
        return "".join(part.value for part in self.parts)

    def to_dict(self) -> dict:
        return {
            "line_number": self.line_number,
            "is_different": self.is_different,
            "parts": [p.to_dict() for p in self.parts]
        }


@dataclass(frozen=True)
class SemanticEntry:
    """
    Classification of a single path against the base document.

    old_value is meaningful unless the path was ADDED; new_value is
    meaningful only for CHANGED and ADDED. Either may legitimately be
    None (JSON null), so presence is decided by change_type.
    """
    path: str
    change_type: SemanticChangeType
    old_value: Any = None
    new_value: Any = None

    @property
    def has_old_value(self) -> bool:
        return self.change_type != SemanticChangeType.ADDED

    @property
    def has_new_value(self) -> bool:
        return self.change_type in (SemanticChangeType.CHANGED, SemanticChangeType.ADDED)

    @property
    def is_different(self) -> bool:
        return self.change_type != SemanticChangeType.UNCHANGED

    def to_dict(self) -> dict:
        result = {
            "path": self.path,
            "change_type": self.change_type.value
        }
        if self.has_old_value:
            result["old_value"] = self.old_value
        if self.has_new_value:
            result["new_value"] = self.new_value
        return result


@dataclass(frozen=True)
class AgeInfo:
    """Age of one document relative to the others (rank 1 = oldest, 0 = unknown)."""
    timestamp: Optional[Union[int, float]] = None
    rank: int = 0
    label: Optional[AgeLabel] = None
    formatted_date: Optional[str] = None
    relative_age: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "rank": self.rank,
            "label": self.label.value if self.label else None,
            "formatted_date": self.formatted_date,
            "relative_age": self.relative_age
        }
