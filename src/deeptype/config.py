"""Pydantic option records with code-baked defaults.

Every public operation builds the matching record from its keyword arguments,
so invalid options fail with ``pydantic.ValidationError`` before any work.
"""

from pydantic import BaseModel, Field, field_validator

DEFAULT_MAX_DEPTH = 10
DEFAULT_WORD_DELIMITERS = frozenset({" ", "-", "_"})


class PathOptions(BaseModel):
    """Options for nested-path enumeration and resolution."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)
    leaf_only: bool = False


class MergeOptions(BaseModel):
    """Options for the broadcast deep merges."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)


class TokenizerOptions(BaseModel):
    """Characters treated as explicit word separators."""

    model_config = {"frozen": True}

    word_delimiters: frozenset[str] = Field(default=DEFAULT_WORD_DELIMITERS, min_length=1)

    @field_validator("word_delimiters")
    @classmethod
    def _single_characters(cls, value: frozenset[str]) -> frozenset[str]:
        for delimiter in value:
            if len(delimiter) != 1:
                raise ValueError(f"word delimiters must be single characters, got {delimiter!r}")
        return value


class TemplateMarkers(BaseModel):
    """Placeholder delimiter pair. ``close`` defaults to ``open``."""

    model_config = {"frozen": True}

    open: str = Field(min_length=1)
    close: str | None = Field(default=None, min_length=1)

    @property
    def close_marker(self) -> str:
        return self.open if self.close is None else self.close
