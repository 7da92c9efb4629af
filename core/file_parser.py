"""
Document loading for DocCompare.

Documents arrive as JSON files or JSON text. A file normally holds one
document; with ``split_arrays`` a top-level array is treated as a query
result set and each element becomes a document of its own.
"""
import json
import logging
from pathlib import Path
from typing import Any, Optional
from dataclasses import dataclass

from core.comparison import document_label

logger = logging.getLogger(__name__)


@dataclass
class ParsedDocument:
    """A decoded document and where it came from."""
    document: Any
    label: str
    filename: str
    file_path: Optional[str] = None
    index: int = 0  # Position within the source when an array was split


def parse_json_content(content: str, filename: str, split_arrays: bool = False) -> Optional[list[ParsedDocument]]:
    """
    Parse JSON text into documents.

    Args:
        content: JSON string content
        filename: Original filename, used as the label fallback
        split_arrays: Treat a top-level array as several documents

    Returns:
        List of ParsedDocument, or None if the content is not valid JSON
    """
    try:
        data = json.loads(content, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error(f"Error parsing JSON content from {filename}: {e}")
        return None

    return _to_documents(data, filename, None, split_arrays)


def parse_json_file(file_path: str, split_arrays: bool = False) -> Optional[list[ParsedDocument]]:
    """
    Parse a JSON file from disk.

    Args:
        file_path: Path to the JSON file
        split_arrays: Treat a top-level array as several documents

    Returns:
        List of ParsedDocument, or None if the file is missing, not a
        .json file or not valid JSON
    """
    path = Path(file_path)

    if not path.exists():
        logger.error(f"File not found: {file_path}")
        return None

    if not path.suffix.lower() == '.json':
        logger.error(f"Not a JSON file: {file_path}")
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f, parse_constant=_reject_constant)
    except (ValueError, OSError) as e:
        logger.error(f"Error parsing {file_path}: {e}")
        return None

    return _to_documents(data, path.name, str(path.absolute()), split_arrays)


def parse_json_documents(file_paths: list[str], split_arrays: bool = False) -> list[ParsedDocument]:
    """
    Load documents from several files, in order.

    Raises:
        ValueError: naming the first file that could not be loaded
    """
    documents = []
    for file_path in file_paths:
        parsed = parse_json_file(file_path, split_arrays=split_arrays)
        if parsed is None:
            raise ValueError(f"Could not load documents from {file_path}")
        documents.extend(parsed)
    return documents


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON numbers
    raise ValueError(f"Non-standard JSON constant: {name}")


def _to_documents(data: Any, filename: str, file_path: Optional[str], split_arrays: bool) -> list[ParsedDocument]:
    items = data if split_arrays and isinstance(data, list) else [data]
    stem = Path(filename).stem or filename

    documents = []
    for index, item in enumerate(items):
        fallback = f"{stem}[{index}]" if len(items) > 1 else stem
        documents.append(ParsedDocument(
            document=item,
            label=document_label(item, fallback=fallback),
            filename=filename,
            file_path=file_path,
            index=index
        ))
    return documents
