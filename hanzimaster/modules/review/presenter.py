"""Card presentation: view models, stroke-order data and key bindings.

Rendering, animation and speech happen on the client; this module decides
*what* each face of a card shows so every client renders the same thing.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

from hanzimaster.core.config import settings
from hanzimaster.modules.decks.models import Card, Example
from hanzimaster.modules.review.models import (
    CardBack,
    CardFront,
    CardView,
    ExampleView,
    ReviewAction,
    ScriptMode,
    SpeechCue,
    StrokeOrder,
)

FRONT_EXAMPLE_LIMIT = 2

_HAN_RE = re.compile("[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\U00020000-\U0002ebef]")

KEY_BINDINGS: dict[str, ReviewAction] = {
    " ": ReviewAction.FLIP,
    "Space": ReviewAction.FLIP,
    "Spacebar": ReviewAction.FLIP,
    "ArrowUp": ReviewAction.FLIP,
    "ArrowDown": ReviewAction.FLIP,
    "ArrowLeft": ReviewAction.PREVIOUS,
    "ArrowRight": ReviewAction.NEXT,
}


def action_for_key(key: str, *, input_focused: bool = False) -> Optional[ReviewAction]:
    """Resolve a key press; typing into a text field never navigates."""
    if input_focused:
        return None
    return KEY_BINDINGS.get(key)


def han_characters(text: str) -> list[str]:
    return _HAN_RE.findall(text)


def stroke_order(text: str) -> StrokeOrder:
    chars = han_characters(text)
    return StrokeOrder(
        characters=chars,
        data_urls=[settings.stroke_data_url.format(char=quote(c)) for c in chars],
    )


def _scripts(card: Card | Example, mode: ScriptMode) -> tuple[str, str]:
    if mode is ScriptMode.TRADITIONAL:
        return card.traditional, card.simplified
    return card.simplified, card.traditional


def _alternate_label(mode: ScriptMode) -> str:
    return mode.toggled().value.capitalize()


def _example_views(
    examples: list[Example], mode: ScriptMode, *, with_english: bool
) -> list[ExampleView]:
    return [
        ExampleView(
            text=_scripts(ex, mode)[0],
            pinyin=ex.pinyin or None,
            english=ex.english if with_english else None,
        )
        for ex in examples
    ]


def render_card(card: Card, *, flipped: bool, script_mode: ScriptMode) -> CardView:
    headword, alternate = _scripts(card, script_mode)
    speech = SpeechCue(text=headword)
    label = _alternate_label(script_mode)
    front = CardFront(
        headword=headword,
        alternate=alternate,
        alternate_label=label,
        speech=speech,
        examples=_example_views(
            card.examples[:FRONT_EXAMPLE_LIMIT], script_mode, with_english=False
        ),
    )
    back = CardBack(
        headword=headword,
        alternate=alternate,
        alternate_label=label,
        pinyin=card.pinyin,
        speech=speech,
        stroke_order=stroke_order(headword),
        english=card.english,
        examples=_example_views(card.examples, script_mode, with_english=True),
    )
    return CardView(
        card_id=card.id,
        flipped=flipped,
        script_mode=script_mode,
        front=front,
        back=back,
    )


def render_text(view: CardView) -> str:
    """Plain-text rendering of the visible face, used by the CLI."""
    lines: list[str] = []
    if not view.flipped:
        face = view.front
        lines.append(f"{face.headword}    [{face.alternate_label}: {face.alternate}]")
        if face.examples:
            lines.append("")
            lines.append("Example usage:")
            for ex in face.examples:
                if ex.pinyin:
                    lines.append(f"  {ex.pinyin}")
                lines.append(f"  {ex.text}")
        return "\n".join(lines)

    back = view.back
    lines.append(f"{back.pinyin}    {back.headword}    [{back.alternate_label}: {back.alternate}]")
    lines.append(back.english)
    for ex in back.examples:
        lines.append("")
        if ex.pinyin:
            lines.append(f"  {ex.pinyin}")
        lines.append(f"  {ex.text}")
        if ex.english:
            lines.append(f"  {ex.english}")
    return "\n".join(lines)
