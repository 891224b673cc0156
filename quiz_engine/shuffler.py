"""Per-question option shuffling with pinned "all of the above" options."""
from __future__ import annotations

import random

from quiz_engine.models import Question, ShuffledOption

BOTTOM_PHRASES = ("all of the above", "all of these", "all the above")


def should_stay_at_bottom(option_text: str) -> bool:
    text = option_text.lower()
    return any(phrase in text for phrase in BOTTOM_PHRASES)


def fisher_yates(items: list, rng: random.Random) -> list:
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class OptionShuffler:
    """
    Shuffles the options of each question once per session.

    The permutation is cached by question id until reset() is called, so
    revisiting a question keeps its option order stable.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self._cache: dict[int, list[ShuffledOption]] = {}

    def shuffle(self, question: Question) -> list[ShuffledOption]:
        cached = self._cache.get(question.id)
        if cached is not None:
            return cached

        indexed = [
            ShuffledOption(option, index) for index, option in enumerate(question.options)
        ]
        bottom = [item for item in indexed if should_stay_at_bottom(item.option.text)]
        regular = [item for item in indexed if not should_stay_at_bottom(item.option.text)]

        shuffled = fisher_yates(regular, self.rng) + bottom
        self._cache[question.id] = shuffled
        return shuffled

    def reset(self) -> None:
        self._cache.clear()
