"""
Source positions used to annotate diagnostics.
"""

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    """
    Immutable position within a configuration source.

    Attributes:
        source: Identifier of the source (file name, URL or stream label)
        offset: Zero-based character offset
        line: One-based line number
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Identifier of the configuration source")
    offset: int = Field(0, ge=0, description="Zero-based character offset")
    line: int = Field(1, ge=1, description="One-based line number")

    def __str__(self) -> str:
        return f"{self.source}({self.offset}):{self.line}"
