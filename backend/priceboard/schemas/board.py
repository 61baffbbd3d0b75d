"""Board Schemas — request/response models for the HTTP API.

Invariants:
    - SelectionToggle.set_code: 1-10 chars after stripping, lower-cased
    - Responses are built from core values, never from raw catalog payloads

Design Decisions:
    - field_validator for side-effect-free transforms (strip, lower) — keeps routes thin
"""

from pydantic import BaseModel, Field, field_validator

from priceboard.core.records import SourceSet


class SelectionToggle(BaseModel):
    """Toggle one set code in or out of the selection."""
    set_code: str = Field(min_length=1, max_length=10)

    @field_validator("set_code")
    @classmethod
    def normalize(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("set_code cannot be empty or whitespace")
        return v


class SelectionResponse(BaseModel):
    set_codes: list[str]
    count: int


class SourceSetResponse(BaseModel):
    code: str
    name: str
    icon_svg_uri: str
    digital: bool
    set_type: str

    @classmethod
    def from_domain(cls, source_set: SourceSet) -> "SourceSetResponse":
        return cls(
            code=source_set.code,
            name=source_set.name,
            icon_svg_uri=source_set.icon_svg_uri,
            digital=source_set.digital,
            set_type=source_set.set_type,
        )


class FetchStartedResponse(BaseModel):
    generation: int
    set_codes: list[str]
