"""
Display formatting for list cells and pagination controls.

The list view shows one short string per cell: language maps collapse to the
selected language, arrays to an item count, JSON to a short preview and
geometries to a placeholder.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from holyspots_admin.core.catalog import ColumnDescriptor, ColumnKind, Language

EMPTY_CELL = "-"
TRUNCATE_AT = 50
GEOMETRY_PLACEHOLDER = "[geometry]"
FALLBACK_LANGUAGE = Language.en


def localized_value(value: Any, language: Language | str) -> Optional[str]:
    """Resolve a language map to one string.

    Falls back to English, then to the first non-empty entry. Plain strings
    are returned unchanged.
    """
    if value is None:
        return None
    if not isinstance(value, Mapping):
        return str(value)
    lang = language.value if isinstance(language, Language) else language
    for candidate in (lang, FALLBACK_LANGUAGE.value):
        text = value.get(candidate)
        if text:
            return str(text)
    for text in value.values():
        if text:
            return str(text)
    return None


def _truncate(text: str, limit: int = TRUNCATE_AT) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


def _format_timestamp(value: Any) -> str:
    if not isinstance(value, str):
        return str(value)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def format_cell(row: Mapping[str, Any], column: ColumnDescriptor, language: Language | str) -> str:
    """Render one cell of the list view."""
    value = row.get(column.key)
    if value is None:
        return EMPTY_CELL

    if column.kind == ColumnKind.language_map:
        # Only the selected language is shown; other languages live in the edit form.
        lang = language.value if isinstance(language, Language) else language
        text = value.get(lang) if isinstance(value, Mapping) else value
        if not text:
            return EMPTY_CELL
        return _truncate(str(text)) if column.truncate else str(text)

    if column.kind == ColumnKind.string_array or isinstance(value, list):
        return f"[{len(value)} items]" if isinstance(value, list) else "[]"

    if column.kind == ColumnKind.geometry:
        return GEOMETRY_PLACEHOLDER

    if column.kind == ColumnKind.timestamp:
        return _format_timestamp(value)

    if column.kind == ColumnKind.foreign_key:
        return str(row.get(f"{column.key}_name") or value)

    if column.kind == ColumnKind.boolean:
        return "true" if value else "false"

    if column.kind == ColumnKind.json or isinstance(value, Mapping):
        return _truncate(json.dumps(value, ensure_ascii=False))

    text = str(value)
    return _truncate(text) if column.truncate else text


def format_row(
    row: Mapping[str, Any], columns: List[ColumnDescriptor], language: Language | str
) -> Dict[str, str]:
    return {column.key: format_cell(row, column, language) for column in columns}


def page_window(current: int, total: int) -> List[Optional[int]]:
    """Page numbers to render: first, last, current +/- 1, ``None`` for gaps."""
    if total <= 0:
        return []
    current = min(max(current, 1), total)
    shown = {1, total, *range(max(2, current - 1), min(total - 1, current + 1) + 1)}
    window: List[Optional[int]] = []
    previous = 0
    for page in sorted(shown):
        if page - previous > 1:
            window.append(None)
        window.append(page)
        previous = page
    return window
