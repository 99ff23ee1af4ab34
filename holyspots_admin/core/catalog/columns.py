"""
Column descriptor models.

A column descriptor is static metadata describing how one entity field is
displayed and queried. The ``kind`` tag decides everything else: which
operators a filter uses, whether the column takes part in free-text search,
whether it can be sorted and how its value is rendered.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Language(str, Enum):
    """Languages carried by language-map fields."""

    en = "en"
    hi = "hi"
    ru = "ru"


DEFAULT_LANGUAGE = Language.ru
SUPPORTED_LANGUAGES: tuple[Language, ...] = tuple(Language)


class ColumnKind(str, Enum):
    """Value shape of a column."""

    identifier = "identifier"  # uuid primary key; exact match only
    text = "text"
    number = "number"
    boolean = "boolean"
    timestamp = "timestamp"
    language_map = "language_map"  # {"en": ..., "hi": ..., "ru": ...}
    string_array = "string_array"
    json = "json"
    geometry = "geometry"
    foreign_key = "foreign_key"


SEARCHABLE_KINDS = frozenset({ColumnKind.text, ColumnKind.language_map})
UNFILTERABLE_KINDS = frozenset({ColumnKind.string_array, ColumnKind.json, ColumnKind.geometry, ColumnKind.timestamp})
UNSORTABLE_KINDS = frozenset({ColumnKind.string_array, ColumnKind.json, ColumnKind.geometry})


class ColumnDescriptor(BaseModel):
    """Display and query metadata for one column of a managed table."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Column name in the backend table")
    label: str = Field(description="Human-readable column label")
    kind: ColumnKind = Field(default=ColumnKind.text, description="Value shape of the column")
    sortable: bool = Field(default=True, description="Whether the list view may order by this column")
    truncate: bool = Field(default=False, description="Whether long values are shortened in list cells")
    target_table: Optional[str] = Field(default=None, description="Referenced table for foreign key columns")
    target_label_key: str = Field(default="name", description="Display column of the referenced table")

    @model_validator(mode="after")
    def _check_kind_flags(self) -> "ColumnDescriptor":
        if self.kind == ColumnKind.foreign_key and not self.target_table:
            raise ValueError(f"Foreign key column '{self.key}' needs a target_table")
        if self.kind != ColumnKind.foreign_key and self.target_table:
            raise ValueError(f"Column '{self.key}' of kind '{self.kind.value}' cannot reference a table")
        if self.sortable and self.kind in UNSORTABLE_KINDS:
            raise ValueError(f"Column '{self.key}' of kind '{self.kind.value}' cannot be sortable")
        return self

    @property
    def searchable(self) -> bool:
        return self.kind in SEARCHABLE_KINDS

    @property
    def filterable(self) -> bool:
        return self.kind not in UNFILTERABLE_KINDS

    @property
    def is_localized(self) -> bool:
        return self.kind == ColumnKind.language_map

    def query_path(self, language: Language | str) -> str:
        """Return the backend column expression used to filter or order by this column.

        Language-map columns resolve to the text value of the selected language.
        """
        if self.is_localized:
            lang = language.value if isinstance(language, Language) else language
            return f"{self.key}->>{lang}"
        return self.key
