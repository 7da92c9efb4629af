"""
Plain-text rendering of a comparison result.

Used by the CLI and the file comparison endpoint.
"""
import json
from datetime import datetime, timezone
from typing import Optional

from core.comparison import ComparisonResult, DiffMode
from core.models import AgeLabel, SemanticChangeType

_MARKERS = {
    SemanticChangeType.UNCHANGED: " ",
    SemanticChangeType.CHANGED: "~",
    SemanticChangeType.ADDED: "+",
    SemanticChangeType.REMOVED: "-",
}


def format_value_compact(value) -> str:
    """Format a value for display in a compact way."""
    text = json.dumps(value, ensure_ascii=False, separators=(',', ':'))
    if len(text) > 60:
        text = text[:57] + "..."
    return text


def format_age_badge(age) -> str:
    if age.timestamp is None:
        return ""
    if age.label == AgeLabel.OLDEST:
        badge = "oldest"
    elif age.label == AgeLabel.NEWEST:
        badge = "newest"
    elif age.label == AgeLabel.MIDDLE:
        badge = f"#{age.rank}"
    else:
        badge = ""
    parts = [p for p in (badge, age.relative_age, age.formatted_date and f"({age.formatted_date})") if p]
    return " ".join(parts)


def format_character_line(row) -> str:
    """Inline markup for a character diff line: [-removed-] and {+added+}."""
    chunks = []
    for part in row.parts:
        if part.added:
            chunks.append("{+" + part.value + "+}")
        elif part.removed:
            chunks.append("[-" + part.value + "-]")
        else:
            chunks.append(part.value)
    return "".join(chunks)


def format_report(result: ComparisonResult, sources: Optional[list[str]] = None, app_version: str = "") -> str:
    """Generate a text report for a comparison."""
    lines = [
        "=" * 70,
        "DOCUMENT COMPARISON REPORT",
        f"DocCompare v{app_version}" if app_version else "DocCompare",
        "=" * 70,
        "",
        f"Timestamp:        {datetime.now(timezone.utc).isoformat()}",
        f"Mode:             {result.mode.value}",
        f"Documents:        {result.document_count}",
    ]
    if sources:
        for source in sources:
            lines.append(f"  - {source}")
    lines.append("")

    noun = "difference" if result.difference_count == 1 else "differences"
    lines.extend([
        "-" * 40,
        f"RESULT: {result.difference_count} {noun.upper()}" if not result.is_identical
        else "RESULT: NO DIFFERENCES FOUND",
        "-" * 40,
        "",
    ])

    for index, rows in enumerate(result.view.views):
        label = result.labels[index] if index < len(result.labels) else f"Document {index + 1}"
        header = f"[{index + 1}] {label}"
        if index == 0 and result.mode != DiffMode.LINE:
            header += " (base)"
        if index < len(result.ages):
            badge = format_age_badge(result.ages[index])
            if badge:
                header += f"  {badge}"
        lines.append(header)

        if result.mode == DiffMode.LINE:
            for row in rows:
                marker = "!" if row.is_different else " "
                lines.append(f"  {marker} {row.line_number:>4} | {row.text}")
        elif result.mode == DiffMode.CHARACTER:
            for row in rows:
                marker = "!" if row.is_different else " "
                lines.append(f"  {marker} {row.line_number:>4} | {format_character_line(row)}")
        else:
            for entry in rows:
                marker = _MARKERS[entry.change_type]
                if entry.change_type == SemanticChangeType.CHANGED:
                    value = f"{format_value_compact(entry.old_value)} -> {format_value_compact(entry.new_value)}"
                elif entry.change_type == SemanticChangeType.ADDED:
                    value = format_value_compact(entry.new_value)
                else:
                    value = format_value_compact(entry.old_value)
                lines.append(f"  {marker} {entry.path}: {value}")
        lines.append("")

    lines.extend([
        "=" * 70,
        "END OF REPORT",
        "=" * 70,
    ])

    return "\n".join(lines)
