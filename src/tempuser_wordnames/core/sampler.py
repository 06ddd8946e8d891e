"""Random memorable identifier generator."""

import logging
import random
from typing import Optional, Sequence

from .models import GenerationRequest
from .resolver import FALLBACK_WORDS

logger = logging.getLogger(__name__)


def capitalize_first(word: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return word[:1].upper() + word[1:]


class IdentifierSampler:
    """Builds identifiers like "AppleBananaCherry42" from a word list."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def sample(
        self,
        words: Sequence[str],
        num_words: int,
        request: GenerationRequest,
        offset: int = 0,
        use_index: Optional[bool] = None,
    ) -> str:
        """Generate an identifier.

        Args:
            words: Resolved word list
            num_words: How many distinct words to combine
            request: Index and whether to append it
            offset: Added to the index before it is appended
            use_index: Overrides request.use_index when given

        Returns:
            Concatenated capitalized words, optionally followed by
            ``request.index + offset``
        """
        if not words:
            logger.warning("Sampling from an empty word list, using fallback list")
            words = FALLBACK_WORDS

        count = min(max(num_words, 1), len(words))
        if count != num_words:
            logger.warning(f"Cannot sample {num_words} words from {len(words)}, using {count}")

        # Pick positions without replacement, then reorder independently
        positions = sorted(self._rng.sample(range(len(words)), count))
        selected = [capitalize_first(words[i]) for i in positions]
        self._rng.shuffle(selected)

        if use_index is None:
            use_index = request.use_index
        suffix = str(request.index + offset) if use_index else ""
        return "".join(selected) + suffix
