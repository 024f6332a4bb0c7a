"""Random text scrambling for the dashboard's glitch effect."""

import random

from memmon.config import GLITCH_CHANCE, GLITCH_CHAR_CHANCE

GLITCH_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?/~"


def glitch_text(text: str, rng: random.Random, char_chance: float = GLITCH_CHAR_CHANCE) -> str:
    """Replace each character of text with a glitch character at char_chance."""
    return "".join(
        rng.choice(GLITCH_CHARS) if rng.random() < char_chance else char for char in text
    )


class GlitchEffect:
    """
    Decides once per tick whether the glitch is active and applies it.

    Pass a seeded random.Random to make the effect reproducible.
    """

    def __init__(
        self,
        chance: float = GLITCH_CHANCE,
        char_chance: float = GLITCH_CHAR_CHANCE,
        rng: random.Random | None = None,
    ) -> None:
        self._chance = chance
        self._char_chance = char_chance
        self._rng = rng if rng is not None else random.Random()
        self._active = False

    @property
    def active(self) -> bool:
        """Check whether the current tick is glitched."""
        return self._active

    def roll(self) -> bool:
        """Start a new tick, deciding whether it is glitched."""
        self._active = self._rng.random() < self._chance
        return self._active

    def apply(self, text: str) -> str:
        """Scramble text if the current tick is glitched."""
        if not self._active:
            return text
        return glitch_text(text, self._rng, self._char_chance)
