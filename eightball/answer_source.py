"""Fixed set of Magic 8 Ball phrases with uniform random selection."""

import logging
import random
from typing import Optional, Sequence, Tuple


logger = logging.getLogger(__name__)


DEFAULT_ANSWERS: Tuple[str, ...] = (
    # Affirmative
    "It is certain",
    "It is decidedly so",
    "Without a doubt",
    "Yes definitely",
    "You may rely on it",
    "As I see it, yes",
    "Most likely",
    "Outlook good",
    "Yes",
    "Signs point to yes",
    # Non-committal
    "Reply hazy, try again",
    "Ask again later",
    "Better not tell you now",
    "Cannot predict now",
    "Concentrate and ask again",
    # Negative
    "Don't count on it",
    "My reply is no",
    "My sources say no",
    "Outlook not so good",
    "Very doubtful",
)


class AnswerSource:
    """Immutable answer set that hands out one phrase per draw."""

    def __init__(
        self,
        answers: Sequence[str] = DEFAULT_ANSWERS,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the answer source.

        Args:
            answers: Phrases to choose from (copied into a tuple)
            rng: Random generator to use; defaults to SystemRandom, which
                 draws from OS entropy and can be shared across threads

        Raises:
            ValueError: If the answer set is empty
        """
        self._answers = tuple(answers)
        if not self._answers:
            raise ValueError("Answer set cannot be empty")

        self._rng = rng if rng is not None else random.SystemRandom()
        logger.info(f"AnswerSource initialized with {len(self._answers)} answers")

    @property
    def answers(self) -> Tuple[str, ...]:
        return self._answers

    def draw(self) -> str:
        """Return one answer chosen uniformly at random."""
        return self._rng.choice(self._answers)
