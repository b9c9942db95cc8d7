"""Rendered style-tag lines."""

from pydantic import BaseModel, Field


class FormattedLine(BaseModel):
    """One display line after its style-tag prefix has been interpreted."""
    text: str
    bold: bool = False
    center: bool = False
    italic: bool = False
    underline: bool = False


class FormattedWikiEntry(BaseModel):
    """Display-ready text blocks of a wiki entry."""
    id: str
    name: str
    type: str
    content: list[FormattedLine] = Field(default_factory=list)
    personality: list[FormattedLine] = Field(default_factory=list)
    interaction_history: list[FormattedLine] = Field(default_factory=list)
