"""Pydantic models for review sessions and rendered card views."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ScriptMode(str, Enum):
    SIMPLIFIED = "simplified"
    TRADITIONAL = "traditional"

    def toggled(self) -> "ScriptMode":
        if self is ScriptMode.SIMPLIFIED:
            return ScriptMode.TRADITIONAL
        return ScriptMode.SIMPLIFIED


class ReviewAction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    FLIP = "flip"
    TOGGLE_SCRIPT = "toggle_script"


class SpeechCue(BaseModel):
    text: str
    lang: str = "zh-CN"


class StrokeOrderOptions(BaseModel):
    width: int = 120
    height: int = 120
    padding: int = 5
    stroke_animation_speed: float = 1
    delay_between_strokes: int = 200  # ms
    show_outline: bool = True
    stroke_color: str = "#3b82f6"
    radical_color: str = "#1d4ed8"


class StrokeOrder(BaseModel):
    characters: list[str] = Field(default_factory=list)
    data_urls: list[str] = Field(default_factory=list)
    options: StrokeOrderOptions = Field(default_factory=StrokeOrderOptions)


class ExampleView(BaseModel):
    text: str
    pinyin: Optional[str] = None
    english: Optional[str] = None


class CardFront(BaseModel):
    headword: str
    alternate: str
    alternate_label: str
    speech: SpeechCue
    examples: list[ExampleView] = Field(default_factory=list)


class CardBack(BaseModel):
    headword: str
    alternate: str
    alternate_label: str
    pinyin: str
    speech: SpeechCue
    stroke_order: StrokeOrder
    english: str
    examples: list[ExampleView] = Field(default_factory=list)


class CardView(BaseModel):
    card_id: str
    flipped: bool
    script_mode: ScriptMode
    front: CardFront
    back: CardBack


class Progress(BaseModel):
    position: int  # 1-based
    total: int
    percent: float


class SessionState(BaseModel):
    id: str
    title: Optional[str] = None
    active_index: int = 0
    flipped: bool = False
    script_mode: ScriptMode = ScriptMode.SIMPLIFIED
    busy: bool = False
    progress: Optional[Progress] = None
    card: Optional[CardView] = None
    created_at: str
    last_activity: str
