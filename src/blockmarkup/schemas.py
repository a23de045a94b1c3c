"""Pydantic schemas for raw (serialized) document data."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawInlineStyleRange(BaseModel):
    """A style label applied to a character range."""

    offset: int = Field(ge=0)
    length: int = Field(ge=0)
    style: str


class RawEntityRange(BaseModel):
    """An entity reference applied to a character range."""

    offset: int = Field(ge=0)
    length: int = Field(ge=0)
    key: str

    @field_validator("key", mode="before")
    @classmethod
    def coerce_key_to_string(cls, v: Any) -> str:
        """Entity keys are often serialized as integers."""
        return str(v)


class RawBlock(BaseModel):
    """Schema for a single block."""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    type: str = "unstyled"
    text: str = ""
    depth: int = Field(default=0, ge=0)
    inline_style_ranges: list[RawInlineStyleRange] = Field(
        default_factory=list[RawInlineStyleRange], alias="inlineStyleRanges"
    )
    entity_ranges: list[RawEntityRange] = Field(
        default_factory=list[RawEntityRange], alias="entityRanges"
    )
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("key", mode="before")
    @classmethod
    def coerce_key_to_string(cls, v: Any) -> str:
        """Ensure block key is a string."""
        return str(v)

    @field_validator("data", mode="before")
    @classmethod
    def ensure_dict(cls, v: Any) -> dict[str, Any]:
        """Treat a missing data payload as empty."""
        if v is None:
            return {}
        return v


class RawEntity(BaseModel):
    """Schema for an entity map entry."""

    type: str
    mutability: str = "MUTABLE"
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def ensure_dict(cls, v: Any) -> dict[str, Any]:
        """Treat a missing data payload as empty."""
        if v is None:
            return {}
        return v


class RawContent(BaseModel):
    """Schema for a whole raw document."""

    model_config = ConfigDict(populate_by_name=True)

    blocks: list[RawBlock] = Field(default_factory=list[RawBlock])
    entity_map: dict[str, RawEntity] = Field(
        default_factory=dict[str, RawEntity], alias="entityMap"
    )

    @field_validator("entity_map", mode="before")
    @classmethod
    def coerce_entity_keys(cls, v: Any) -> Any:
        """Entity map keys may be integers when loaded from YAML."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(key): value for key, value in v.items()}  # type: ignore[misc]
        return v
