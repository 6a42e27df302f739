"""Flashcard generation and the text helpers it needs."""
import random
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from lexitrack.models.records import VocabularyItem
from lexitrack.services.randomness import shuffle

BLANK = "_____"

SINGLE_CHOICE = "single-choice"
FILL_IN_THE_BLANK = "fill-in-the-blank"


@dataclass(frozen=True)
class QuizCard:
    """A question about one word."""

    guid: str
    card_type: str
    title: str
    description: str
    question: str
    correct_answers: List[str]
    options: List[str] = field(default_factory=list)
    explanation: str = ""


def strip_markdown(text: Optional[str]) -> str:
    """Remove bold, italic, underline, code and link markup."""
    if not text:
        return ""
    text = re.sub(r"\*\*(.*?)\*\*", r"\1", text)
    text = re.sub(r"\*(.*?)\*", r"\1", text)
    text = re.sub(r"__(.*?)__", r"\1", text)
    text = re.sub(r"`(.*?)`", r"\1", text)
    return re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)


def highlight_word(sentence: str, word: str) -> str:
    """Wrap every whole-word occurrence of ``word`` in ``**``."""
    pattern = re.compile(rf"\b({re.escape(word)})\b", re.IGNORECASE)
    return pattern.sub(r"**\1**", sentence)


def extract_highlighted(sentence: str) -> Optional[str]:
    """First ``**highlighted**`` fragment of a sentence, if any."""
    match = re.search(r"\*\*(.*?)\*\*", sentence)
    return match.group(1) if match else None


def truncate(text: str, max_length: int) -> str:
    if not text or len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def build_choice_card(
    item: VocabularyItem,
    incorrect_options: Sequence[str],
    rng: Optional[random.Random] = None,
) -> QuizCard:
    """Single choice card asking for the translation of a word.

    The correct translation and the distractors are shuffled together;
    empty options are dropped.
    """
    options = [option for option in [item.translation, *incorrect_options] if option]
    return QuizCard(
        guid=f"test-{item.guid}",
        card_type=SINGLE_CHOICE,
        title="Vocabulary Test",
        description="Choose the correct translation",
        question=f"What does '{item.word}' mean?",
        options=shuffle(options, rng),
        correct_answers=[item.translation] if item.translation else [],
        explanation=item.explanation or item.definition or "",
    )


def build_fill_blank_card(
    item: VocabularyItem,
    sentence: str,
    translation: Optional[str] = None,
    index: int = 0,
) -> Optional[QuizCard]:
    """Fill in the blank card from an example with the word in ``**`` markers.

    Returns None when the example does not mark the word.
    """
    pattern = re.compile(rf"\*\*{re.escape(item.word)}\*\*", re.IGNORECASE)
    question, replaced = pattern.subn(BLANK, sentence)
    if not replaced:
        return None

    return QuizCard(
        guid=f"fill-blank-{item.guid}-{index}",
        card_type=FILL_IN_THE_BLANK,
        title="Fill in the Blank",
        description="Complete the sentence",
        question=question,
        correct_answers=[item.word],
        explanation=translation or "",
    )
