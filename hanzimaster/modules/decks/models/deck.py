"""Pydantic models for the canonical deck shape.

``Deck``/``Card``/``Example`` are what the rest of the application handles
and what gets exported. ``GeneratedDeck`` is the structured output schema
handed to the model; it carries no ids since those are assigned on ingestion.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Example(BaseModel):
    """An example sentence in both scripts."""

    simplified: str
    traditional: str
    pinyin: Optional[str] = None
    english: str


class Card(BaseModel):
    """One vocabulary entry."""

    id: str
    simplified: str
    traditional: str
    pinyin: str
    english: str
    examples: list[Example] = Field(default_factory=list)


class Deck(BaseModel):
    """A titled, ordered set of cards."""

    title: str
    cards: list[Card]


class GeneratedExample(BaseModel):
    simplified: str = Field(description="Example sentence in Simplified Chinese")
    traditional: str = Field(description="Example sentence in Traditional Chinese")
    pinyin: str = Field(description="Pinyin for the example sentence")
    english: str


class GeneratedCard(BaseModel):
    simplified: str = Field(description="The word in Simplified Chinese")
    traditional: str = Field(description="The word in Traditional Chinese")
    pinyin: str = Field(description="Pinyin with proper tone marks")
    english: str = Field(description="English definition")
    examples: list[GeneratedExample]


class GeneratedDeck(BaseModel):
    title: str = Field(description="A creative title for this deck")
    cards: list[GeneratedCard]
