"""
Persona-level text transforms.

Every step is idempotent (applying it to its own output changes nothing) and
the chain never turns non-empty text into empty text or vice versa.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Tuple

Transform = Callable[[str], str]

EMPATHY_PHRASES = (
    "i understand", "i can sense", "i hear you", "that sounds", "i imagine", "it seems like", "i can feel",
)
EMPATHY_PREFACE = "I can sense what you're going through. "

_SOFTENERS: Tuple[Tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\byou should\b", re.IGNORECASE), "you might consider"),
    (re.compile(r"\bmust\b", re.IGNORECASE), "could"),
    (re.compile(r"\bobviously\b", re.IGNORECASE), "perhaps"),
)

_CASUAL: Tuple[Tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bI would\b"), "I'd"),
    (re.compile(r"\byou will\b"), "you'll"),
    (re.compile(r"\bcannot\b"), "can't"),
    (re.compile(r"\bdo not\b"), "don't"),
)

_FORMAL: Tuple[Tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\bI'd\b"), "I would"),
    (re.compile(r"\byou'll\b"), "you will"),
    (re.compile(r"\bcan't\b"), "cannot"),
    (re.compile(r"\bdon't\b"), "do not"),
    (re.compile(r"\bwanna\b"), "want to"),
)

_EMOJI_RX = re.compile("[\U0001F300-\U0001FAFF☀-➿⭐⭕️]")


def _substitute(rules: Tuple[Tuple[re.Pattern[str], str], ...]) -> Transform:
    def _apply(text: str) -> str:
        for rx, repl in rules:
            text = rx.sub(repl, text)
        return text

    return _apply


def empathetic_preface(text: str) -> str:
    lowered = text.lower()
    if any(p in lowered for p in EMPATHY_PHRASES):
        return text
    return EMPATHY_PREFACE + text


soften = _substitute(_SOFTENERS)
make_casual = _substitute(_CASUAL)
make_formal = _substitute(_FORMAL)


def reduce_emojis(text: str) -> str:
    return re.sub(r"[ \t]{2,}", " ", _EMOJI_RX.sub("", text)).strip()


def signature(emoji: str) -> Transform:
    prefix = f"{emoji} "

    def _apply(text: str) -> str:
        return text if text.startswith(emoji) else prefix + text

    return _apply


@dataclass(frozen=True)
class ToneProfile:
    """Big-Five style traits on a 0-10 scale."""

    agreeableness: int = 5
    neuroticism: int = 5
    conscientiousness: int = 5
    playfulness: int = 5
    extraversion: int = 5

    @property
    def formality_score(self) -> int:
        return self.conscientiousness + (10 - self.playfulness)

    @property
    def emoji_tendency(self) -> float:
        return (self.playfulness + self.extraversion) / 2.0


class PersonaFilter:
    def __init__(self, steps: List[Tuple[str, Transform]] | None = None):
        self.steps: Tuple[Tuple[str, Transform], ...] = tuple(steps or ())

    @property
    def step_names(self) -> List[str]:
        return [name for name, _ in self.steps]

    def apply(self, text: str) -> str:
        if not text or not text.strip():
            return text
        for _, step in self.steps:
            out = step(text)
            # a step may never empty the text
            if out and out.strip():
                text = out
        return text

    __call__ = apply

    @classmethod
    def identity(cls) -> "PersonaFilter":
        return cls([])

    @classmethod
    def from_tone(cls, tone: ToneProfile, *, emoji: str = "") -> "PersonaFilter":
        steps: List[Tuple[str, Transform]] = []
        if tone.agreeableness > 7:
            steps.append(("empathetic_preface", empathetic_preface))
        if tone.neuroticism > 6:
            steps.append(("soften", soften))
        if tone.formality_score <= 8:
            steps.append(("casual", make_casual))
        elif tone.formality_score >= 15:
            steps.append(("formal", make_formal))
        if tone.emoji_tendency <= 3:
            steps.append(("reduce_emojis", reduce_emojis))
        elif tone.emoji_tendency >= 8 and emoji:
            steps.append(("signature", signature(emoji)))
        return cls(steps)
