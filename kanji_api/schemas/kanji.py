"""Kanji Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - KanjiCreate.character: 1-16 chars after stripping; readings/meaning default to ""
    - KanjiPatch: every field optional, explicit null rejected, character non-empty if given
    - Unknown fields rejected on every input model (extra="forbid")
    - KanjiSample / DeleteAllResponse serialize camelCase keys (isDefaultSet, deletedCount)

Design Decisions:
    - KanjiPatch separate from KanjiCreate: update merges only the fields the
      client actually sent (model_dump(exclude_unset=True))
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_TEXT_FIELDS = ("character", "onyomi", "kunyomi", "meaning")


def _strip_character(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("character cannot be empty or whitespace")
    return v


class KanjiCreate(BaseModel):
    """Kanji creation — character required, the rest default to empty strings."""
    model_config = ConfigDict(extra="forbid")

    character: str = Field(min_length=1, max_length=16)
    onyomi: str = ""
    kunyomi: str = ""
    meaning: str = ""

    @field_validator("character")
    @classmethod
    def strip_character(cls, v: str) -> str:
        return _strip_character(v)


class KanjiPatch(BaseModel):
    """Partial update — only fields present in the request body are applied."""
    model_config = ConfigDict(extra="forbid")

    character: str | None = Field(None, min_length=1, max_length=16)
    onyomi: str | None = None
    kunyomi: str | None = None
    meaning: str | None = None

    @field_validator("character")
    @classmethod
    def strip_character(cls, v: str | None) -> str | None:
        return v if v is None else _strip_character(v)

    @model_validator(mode="after")
    def reject_explicit_null(self):
        nulls = [
            name for name in _TEXT_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict[str, str]:
        """Fields the client supplied, ready to merge onto a stored record."""
        return self.model_dump(exclude_unset=True)


class KanjiResponse(BaseModel):
    """Kanji response — stored records carry id and timestamps, defaults do not."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    character: str
    onyomi: str = ""
    kunyomi: str = ""
    meaning: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class KanjiSample(BaseModel):
    """Random sample — isDefaultSet tells the client the store was empty."""
    model_config = ConfigDict(populate_by_name=True)

    kanji: list[KanjiResponse]
    is_default_set: bool = Field(alias="isDefaultSet")


class DeleteAllResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    deleted_count: int = Field(alias="deletedCount")


class MessageResponse(BaseModel):
    message: str
