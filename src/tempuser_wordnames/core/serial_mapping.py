"""Serial mapping: turns an account index into a word-based name."""

import logging
from typing import Optional

from .models import GenerationRequest, PageFetcher
from .object_cache import ObjectCache
from .resolver import WordListResolver
from .sampler import IdentifierSampler
from .settings import WordNamesSettings

logger = logging.getLogger(__name__)


class WordNamesSerialMapping:
    """Maps a temporary account index to a name like "PearSunnyTofu17".

    Example:
        mapping = WordNamesSerialMapping(settings, fetch_page=fetcher)
        name = mapping.get_serial_id_for_index(17)
    """

    def __init__(
        self,
        settings: WordNamesSettings,
        cache: Optional[ObjectCache] = None,
        fetch_page: Optional[PageFetcher] = None,
        offset: Optional[int] = None,
        sampler: Optional[IdentifierSampler] = None,
    ):
        self.settings = settings
        self.offset = settings.offset if offset is None else offset
        self.num_words = settings.length
        self.use_index = settings.use_index
        self.resolver = WordListResolver(
            settings.word_list,
            settings.length,
            cache=cache,
            fetch_page=fetch_page,
        )
        self.sampler = sampler or IdentifierSampler()

    def get_word_list(self) -> tuple[str, ...]:
        """Get the resolved word list."""
        return self.resolver.resolve()

    def get_serial_id_for_index(self, index: int) -> str:
        """Generate the name for an account index."""
        words = self.resolver.resolve()
        return self.sampler.sample(
            words,
            self.num_words,
            GenerationRequest(index=index, use_index=self.use_index),
            offset=self.offset,
        )

    def invalidate(self) -> None:
        """Re-resolve the word list on next use."""
        logger.info("Invalidating memoized word list")
        self.resolver.invalidate()
