"""Deck generator using pydantic-ai and the Gemini provider.

Two entry points share one system instruction and one structured output
schema (``GeneratedDeck``): ``generate_from_topic`` asks for a themed word
list, ``generate_from_content`` expands a user-supplied list or free text.
Each call is a single attempt; every failure surfaces as ``GenerationError``.
Imports for the LLM provider are kept lazy to avoid import-time errors when
credentials are missing.
"""

from __future__ import annotations

from typing import Optional

from pydantic_ai import Agent
from pydantic_ai.models import Model

from hanzimaster.core.config import settings
from hanzimaster.core.credentials import credential_store
from hanzimaster.core.logging import get_logger
from hanzimaster.modules.decks.errors import GenerationError
from hanzimaster.modules.decks.models import Deck, GeneratedDeck
from hanzimaster.modules.decks.normalizer import GENERATED_PREFIX, normalize_cards

logger = get_logger(__name__)

DEFAULT_TITLE = "Chinese Vocabulary"


def _build_google_model(model_name: str, api_key: Optional[str]):
    """Build the Google Gemini model provider (lazy import)."""
    if not api_key:
        raise GenerationError(
            "Gemini API key not configured. Set GEMINI_API_KEY or save a key in settings."
        )
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    provider = GoogleProvider(api_key=api_key)
    return GoogleModel(model_name, provider=provider)


SYSTEM_PROMPT = (
    "You are an expert Chinese language teacher. "
    "Your task is to generate a comprehensive vocabulary list suitable for flashcards.\n"
    "For each word, provide:\n"
    "1. Simplified Chinese characters.\n"
    "2. Traditional Chinese characters.\n"
    "3. Pinyin with tone marks for the word.\n"
    "4. English definition.\n"
    "5. Example sentences:\n"
    "   - If the user provided a specific phrase or sentence for the word, use ONLY "
    "that phrase, copied exactly. Do NOT generate additional examples.\n"
    "   - If the user provided only the word, generate exactly 2 natural, relevant "
    "example sentences.\n"
    "   - For EACH example, provide the sentence in Simplified Chinese, the sentence "
    "in Traditional Chinese, the Pinyin and the English translation.\n"
    "Ensure the examples are natural and relevant to the context. "
    "Return a single JSON object matching the provided schema: {title, cards}. "
    "No extra keys or commentary; do not include code fences."
)


def build_topic_prompt(topic: str) -> str:
    return (
        "Generate a list of 10-15 vocabulary words related to the topic: "
        f'"{topic.strip()}".'
    )


def build_list_prompt(content: str) -> str:
    return (
        "Create a detailed flashcard deck based on the following list of words and "
        "optional example phrases provided by the user.\n\n"
        "User Input:\n"
        '"""\n'
        f"{content.strip()}\n"
        '"""\n\n'
        "Instructions:\n"
        "1. Parse the input. Each line represents a card.\n"
        '2. The line might be just a word (e.g., "苹果") or a word with an example '
        '(e.g., "苹果: 我爱吃苹果").\n'
        "3. If an example is provided by the user, you MUST use it EXACTLY as the only "
        "example sentence. Do NOT generate any other examples for this card. Do NOT "
        "modify the Chinese characters of the user's example. Provide Pinyin and an "
        "English translation for it.\n"
        "4. If the input is English, translate it to Chinese and treat it as the "
        "target word.\n"
        "5. Provide all missing fields (Traditional, Pinyin for word, Pinyin for "
        "examples, Definition).\n"
        '6. Set the deck title based on the content (e.g., "Custom Vocabulary List").'
    )


def to_deck(generated: GeneratedDeck, *, stamp: Optional[int] = None) -> Deck:
    """Canonicalize model output; zero cards counts as a failed generation."""
    if not generated.cards:
        raise GenerationError("The generation service returned no cards.")
    title = generated.title.strip() or DEFAULT_TITLE
    cards = normalize_cards(generated.cards, prefix=GENERATED_PREFIX, stamp=stamp)
    return Deck(title=title, cards=cards)


class DeckGenerator:
    """Single-shot deck generation against a generative language model.

    ``model`` may be any pydantic-ai model (tests pass ``TestModel``); when
    omitted a Gemini model is built per call from the current credentials.
    """

    def __init__(
        self,
        *,
        model: Model | None = None,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> None:
        self._model = model
        self.model_name = model_name or settings.gemini_model
        self._api_key = api_key

    def _agent(self) -> Agent[None, GeneratedDeck]:
        model = self._model
        if model is None:
            model = _build_google_model(
                self.model_name, self._api_key or credential_store.gemini_api_key
            )
        return Agent[None, GeneratedDeck](
            model=model,
            output_type=GeneratedDeck,
            system_prompt=SYSTEM_PROMPT,
            retries=0,
        )

    async def generate_from_topic(self, topic: str) -> Deck:
        return await self._run(build_topic_prompt(topic))

    async def generate_from_content(self, text: str) -> Deck:
        return await self._run(build_list_prompt(text))

    async def _run(self, prompt: str) -> Deck:
        try:
            res = await self._agent().run(prompt)
        except GenerationError:
            raise
        except Exception as e:  # noqa: BLE001
            logger.warning("Deck generation failed: %s", e)
            raise GenerationError("Failed to generate deck. Please try again.") from e
        deck = to_deck(res.output)
        logger.info("Generated deck %r with %d cards", deck.title, len(deck.cards))
        return deck
