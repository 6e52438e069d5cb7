"""Shared fixtures for the HanziMaster test suite."""

import copy

import pytest
from pydantic_ai.models.test import TestModel

from hanzimaster.core.config import settings
from hanzimaster.core.credentials import credential_store
from hanzimaster.modules.decks.generator import DeckGenerator
from hanzimaster.modules.decks.models import Deck


SAMPLE_DECK = {
    "title": "Fruit Basics",
    "cards": [
        {
            "id": "card-1700000000000-0",
            "simplified": "苹果",
            "traditional": "蘋果",
            "pinyin": "píngguǒ",
            "english": "apple",
            "examples": [
                {
                    "simplified": "我爱吃苹果",
                    "traditional": "我愛吃蘋果",
                    "pinyin": "wǒ ài chī píngguǒ",
                    "english": "I love eating apples",
                }
            ],
        },
        {
            "id": "card-1700000000000-1",
            "simplified": "香蕉",
            "traditional": "香蕉",
            "pinyin": "xiāngjiāo",
            "english": "banana",
            "examples": [],
        },
        {
            "id": "card-1700000000000-2",
            "simplified": "葡萄",
            "traditional": "葡萄",
            "pinyin": "pútáo",
            "english": "grape",
            "examples": [
                {
                    "simplified": "这些葡萄很甜",
                    "traditional": "這些葡萄很甜",
                    "pinyin": None,
                    "english": "These grapes are sweet",
                }
            ],
        },
    ],
}


GENERATED_OUTPUT = {
    "title": "Greetings",
    "cards": [
        {
            "simplified": "你好",
            "traditional": "你好",
            "pinyin": "nǐ hǎo",
            "english": "hello",
            "examples": [
                {
                    "simplified": "你好，老师！",
                    "traditional": "你好，老師！",
                    "pinyin": "nǐ hǎo, lǎoshī!",
                    "english": "Hello, teacher!",
                },
                {
                    "simplified": "你好吗？",
                    "traditional": "你好嗎？",
                    "pinyin": "nǐ hǎo ma?",
                    "english": "How are you?",
                },
            ],
        },
        {
            "simplified": "谢谢",
            "traditional": "謝謝",
            "pinyin": "xièxie",
            "english": "thank you",
            "examples": [
                {
                    "simplified": "谢谢你的帮助",
                    "traditional": "謝謝你的幫助",
                    "pinyin": "xièxie nǐ de bāngzhù",
                    "english": "Thank you for your help",
                },
                {
                    "simplified": "不用谢",
                    "traditional": "不用謝",
                    "pinyin": "bú yòng xiè",
                    "english": "You're welcome",
                },
            ],
        },
    ],
}


@pytest.fixture
def sample_deck_data():
    return copy.deepcopy(SAMPLE_DECK)


@pytest.fixture
def sample_deck(sample_deck_data):
    return Deck.model_validate(sample_deck_data)


@pytest.fixture
def generated_output():
    return copy.deepcopy(GENERATED_OUTPUT)


@pytest.fixture
def fake_generator(generated_output):
    """DeckGenerator backed by pydantic-ai's TestModel instead of Gemini."""
    return DeckGenerator(model=TestModel(custom_output_args=generated_output))


@pytest.fixture(autouse=True)
def isolated_credentials(tmp_path, monkeypatch):
    """Keep credential edits out of the working directory and ignore env keys."""
    monkeypatch.setattr(settings, "gemini_api_key", None)
    monkeypatch.setattr(settings, "google_client_id", None)
    original_path = credential_store.path
    credential_store.path = tmp_path / "credentials.json"
    credential_store.load()
    yield credential_store
    credential_store.path = original_path
    credential_store.load()
