"""Lenient models for card-like input of unknown completeness.

Imported files and older exports may miss ids or fields, or carry the legacy
single ``chinese`` example field. These models only check that the shape is
plausible; ``normalizer`` turns them into canonical ``Card`` objects.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RawExample(BaseModel):
    model_config = ConfigDict(extra="ignore")

    simplified: Optional[str] = None
    traditional: Optional[str] = None
    chinese: Optional[str] = None  # legacy, undifferentiated script
    pinyin: Optional[str] = None
    english: Optional[str] = None


class RawCard(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    simplified: Optional[str] = None
    traditional: Optional[str] = None
    pinyin: Optional[str] = None
    english: Optional[str] = None
    examples: list[RawExample] = Field(default_factory=list)


class RawDeck(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    cards: list[RawCard]
