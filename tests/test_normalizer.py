"""
Tests for Card Normalization

Tests cover:
- Id assignment and uniqueness within a batch
- Legacy single-field example text
- Missing script forms and text fields
"""

from hanzimaster.modules.decks.models import GeneratedDeck, RawCard, RawExample
from hanzimaster.modules.decks.normalizer import (
    GENERATED_PREFIX,
    mint_id,
    normalize_card,
    normalize_cards,
    normalize_example,
)


class TestExampleNormalization:
    """Test example sentence repair."""

    def test_legacy_chinese_field_fills_both_scripts(self):
        """A single 'chinese' field is copied into both script slots."""
        ex = normalize_example(
            RawExample(chinese="我想吃苹果", pinyin="wǒ xiǎng chī píngguǒ", english="I want an apple")
        )
        assert ex.simplified == "我想吃苹果"
        assert ex.traditional == "我想吃苹果"
        assert ex.simplified == ex.traditional

    def test_split_fields_are_preserved(self):
        ex = normalize_example(
            RawExample(simplified="谢谢", traditional="謝謝", chinese="ignored", english="thanks")
        )
        assert ex.simplified == "谢谢"
        assert ex.traditional == "謝謝"

    def test_missing_script_taken_from_the_other(self):
        ex = normalize_example(RawExample(simplified="你好", english="hello"))
        assert ex.traditional == "你好"

    def test_pinyin_is_never_invented(self):
        ex = normalize_example(RawExample(chinese="你好"))
        assert ex.pinyin is None
        assert ex.english == ""


class TestCardNormalization:
    """Test single card normalization."""

    def test_existing_id_is_kept(self):
        card = normalize_card(RawCard(id="abc", simplified="水"), "fallback")
        assert card.id == "abc"

    def test_missing_id_uses_fallback(self):
        card = normalize_card(RawCard(simplified="水"), "fallback")
        assert card.id == "fallback"

    def test_missing_fields_become_empty(self):
        card = normalize_card(RawCard(simplified="水"), "x")
        assert card.traditional == "水"
        assert card.pinyin == ""
        assert card.english == ""
        assert card.examples == []

    def test_legacy_examples_inside_card(self):
        raw = RawCard.model_validate(
            {"simplified": "苹果", "examples": [{"chinese": "我爱吃苹果", "english": "I love apples"}]}
        )
        card = normalize_card(raw, "x")
        assert card.examples[0].simplified == card.examples[0].traditional == "我爱吃苹果"


class TestBatchNormalization:
    """Test id assignment across a batch."""

    def test_ids_assigned_from_stamp_and_position(self):
        cards = normalize_cards(
            [{"simplified": "一"}, {"simplified": "二"}], prefix="imported", stamp=42
        )
        assert [c.id for c in cards] == ["imported-42-0", "imported-42-1"]

    def test_mixed_present_and_missing_ids(self):
        cards = normalize_cards(
            [{"id": "keep-me", "simplified": "一"}, {"simplified": "二"}], stamp=1
        )
        assert cards[0].id == "keep-me"
        assert cards[1].id == "imported-1-1"

    def test_duplicate_ids_are_made_unique(self):
        cards = normalize_cards(
            [{"id": "dup", "simplified": "一"}, {"id": "dup", "simplified": "二"}], stamp=7
        )
        assert cards[0].id == "dup"
        assert cards[1].id != "dup"
        assert len({c.id for c in cards}) == 2

    def test_minted_id_does_not_collide_with_existing(self):
        cards = normalize_cards(
            [{"simplified": "一"}, {"id": mint_id("imported", 5, 0), "simplified": "二"}],
            stamp=5,
        )
        assert len({c.id for c in cards}) == 2
        assert cards[1].id == "imported-5-0"

    def test_generated_models_are_accepted(self, generated_output):
        generated = GeneratedDeck.model_validate(generated_output)
        cards = normalize_cards(generated.cards, prefix=GENERATED_PREFIX, stamp=9)
        assert [c.id for c in cards] == ["card-9-0", "card-9-1"]
        assert cards[1].traditional == "謝謝"
        assert len(cards[0].examples) == 2
