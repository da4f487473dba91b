"""
Option models for parsing, loading and expansion.

These models carry the few tunables of the library. They are plain pydantic
models, validated on construction, so an invalid setting fails early with a
``ValidationError`` instead of surfacing in the middle of a parse.
"""

import codecs

from pydantic import BaseModel, Field, field_validator


DEFAULT_MAX_DEPTH = 16
MIN_MAX_DEPTH = 5


class ExpansionOptions(BaseModel):
    """
    Options controlling template expansion.

    Attributes:
        max_depth: Maximum nesting of recursive substitutions
    """

    max_depth: int = Field(
        DEFAULT_MAX_DEPTH,
        ge=MIN_MAX_DEPTH,
        description="Maximum nesting of recursive substitutions"
    )


class LoaderOptions(BaseModel):
    """
    Options controlling how configuration sources are read.

    Attributes:
        strict_mode: Reject settings defined more than once
        encoding: Text encoding of byte sources
        timeout_seconds: Timeout for URL sources
    """

    strict_mode: bool = Field(False, description="Reject duplicate settings")
    encoding: str = Field("utf-8", description="Text encoding of byte sources")
    timeout_seconds: float = Field(30.0, gt=0, description="Timeout for URL sources")

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Normalize the encoding name and reject unknown codecs."""
        try:
            return codecs.lookup(v).name
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
