"""
Tests for Card Presentation

Tests cover:
- Front/back faces per script preference
- Stroke-order data and speech cues
- Keyboard bindings
"""

import pytest

from hanzimaster.modules.review.models import ReviewAction, ScriptMode
from hanzimaster.modules.review.presenter import (
    action_for_key,
    han_characters,
    render_card,
    render_text,
    stroke_order,
)


class TestRenderCard:
    def test_simplified_preference(self, sample_deck):
        view = render_card(sample_deck.cards[0], flipped=False, script_mode=ScriptMode.SIMPLIFIED)
        assert view.front.headword == "苹果"
        assert view.front.alternate == "蘋果"
        assert view.front.alternate_label == "Traditional"
        assert view.front.speech.text == "苹果"
        assert view.front.speech.lang == "zh-CN"

    def test_traditional_preference(self, sample_deck):
        view = render_card(sample_deck.cards[0], flipped=True, script_mode=ScriptMode.TRADITIONAL)
        assert view.back.headword == "蘋果"
        assert view.back.alternate_label == "Simplified"
        assert view.back.examples[0].text == "我愛吃蘋果"

    def test_front_hides_translations(self, sample_deck):
        view = render_card(sample_deck.cards[0], flipped=False, script_mode=ScriptMode.SIMPLIFIED)
        assert all(ex.english is None for ex in view.front.examples)
        assert view.back.examples[0].english == "I love eating apples"
        assert view.back.pinyin == "píngguǒ"

    def test_front_shows_at_most_two_examples(self, sample_deck):
        card = sample_deck.cards[0]
        card.examples = card.examples * 3
        view = render_card(card, flipped=False, script_mode=ScriptMode.SIMPLIFIED)
        assert len(view.front.examples) == 2
        assert len(view.back.examples) == 3

    def test_back_stroke_order(self, sample_deck):
        view = render_card(sample_deck.cards[0], flipped=True, script_mode=ScriptMode.SIMPLIFIED)
        strokes = view.back.stroke_order
        assert strokes.characters == ["苹", "果"]
        assert len(strokes.data_urls) == 2
        assert strokes.options.delay_between_strokes == 200

    def test_render_text_faces(self, sample_deck):
        card = sample_deck.cards[0]
        front = render_text(render_card(card, flipped=False, script_mode=ScriptMode.SIMPLIFIED))
        back = render_text(render_card(card, flipped=True, script_mode=ScriptMode.SIMPLIFIED))
        assert "苹果" in front and "apple" not in front
        assert "píngguǒ" in back and "apple" in back


class TestStrokeOrder:
    def test_only_han_characters(self):
        assert han_characters("你好, world！") == ["你", "好"]

    def test_urls_are_percent_encoded(self):
        order = stroke_order("水")
        assert order.data_urls[0].endswith("/%E6%B0%B4.json")


class TestKeyBindings:
    @pytest.mark.parametrize("key", [" ", "ArrowUp", "ArrowDown"])
    def test_flip_keys(self, key):
        assert action_for_key(key) is ReviewAction.FLIP

    def test_navigation_keys(self):
        assert action_for_key("ArrowLeft") is ReviewAction.PREVIOUS
        assert action_for_key("ArrowRight") is ReviewAction.NEXT

    def test_suppressed_while_typing(self):
        assert action_for_key("ArrowRight", input_focused=True) is None
        assert action_for_key(" ", input_focused=True) is None

    def test_unknown_key(self):
        assert action_for_key("x") is None
