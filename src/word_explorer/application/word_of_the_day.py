"""
Word of the Day - a process-wide seed word suggested to users.

The word is picked once, on first use, and stays the same for the life of
the process.
"""

from __future__ import annotations

import logging
import random
from functools import cache

logger = logging.getLogger(__name__)

WORDS_OF_THE_DAY: tuple[str, ...] = (
    "ephemeral",
    "sonder",
    "petrichor",
    "serendipity",
    "eloquence",
    "limerence",
    "ineffable",
    "hiraeth",
    "mellifluous",
    "nefelibata",
)


@cache
def get_word_of_the_day() -> str:
    """Return this process's word of the day."""
    word = random.choice(WORDS_OF_THE_DAY)
    logger.info(f"Word of the day: {word}")
    return word
