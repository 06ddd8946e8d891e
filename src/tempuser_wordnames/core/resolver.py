"""Resolution of the word list that identifiers are sampled from."""

import logging
import threading
from typing import Any, Optional

from .exceptions import ConfigurationError
from .models import InlineWords, PageFetcher, RemoteDocument, WordListConfig
from .object_cache import TTL_HOUR, MemoryObjectCache, ObjectCache, make_global_key

logger = logging.getLogger(__name__)

WORD_LIST_CACHE_KEY = make_global_key("tempuserwordnames", "words")

FALLBACK_WORDS: tuple[str, ...] = (
    "Apple", "Banana", "Cherry", "Grape", "Peach", "Pear", "Strawberry", "Watermelon",
    "Apricot", "Blueberry", "Orange", "Tomato", "Plum", "Lime", "Lemon", "Bread",
    "Egg", "Fish", "Garlic", "Sugar", "Bagel", "Tofu", "Muffin", "Cake",
    "Perfect", "Cheerful", "Generous", "Friendly", "Happy", "Important", "Great", "Real",
    "Strong", "Delighted", "Merry", "Sunny", "Jovial", "Elated", "Lucky", "Golden",
    "Blissful", "Pretty", "Silly", "Red", "Yellow", "Green", "Blue", "Orange",
    "Purple", "Pink", "Cyan", "Magenta", "Fluorescent",
)


def parse_word_lines(text: str) -> list[str]:
    """Split page text into words, one per line, skipping blank lines."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def is_word_list(value: Any) -> bool:
    """Whether a cached value is a list of non-empty strings."""
    return isinstance(value, (list, tuple)) and all(
        isinstance(word, str) and word for word in value
    )


class WordListResolver:
    """Resolves the list of candidate words, never failing outright.

    Inline lists are used as configured. Page-backed lists go through the
    shared cache, keyed globally, and are fetched on a miss. Any problem
    (unreachable page, empty content, a list too short for ``num_words``)
    degrades to FALLBACK_WORDS with a warning.

    The result is memoized for the lifetime of the resolver, so a running
    process keeps its list until ``invalidate()`` is called.
    """

    def __init__(
        self,
        config: Optional[WordListConfig],
        num_words: int,
        cache: Optional[ObjectCache] = None,
        fetch_page: Optional[PageFetcher] = None,
        ttl: int = TTL_HOUR,
    ):
        if config is None:
            raise ConfigurationError("A word list (inline words or a page) must be configured")
        if isinstance(config, RemoteDocument) and fetch_page is None:
            raise ConfigurationError(
                f"Word list page '{config.page_name}' is configured but no page fetcher was given"
            )

        self.config = config
        self.num_words = num_words
        self.cache = cache if cache is not None else MemoryObjectCache()
        self.fetch_page = fetch_page
        self.ttl = ttl

        self._words: Optional[tuple[str, ...]] = None
        self._lock = threading.Lock()

    def resolve(self) -> tuple[str, ...]:
        """Return the effective word list, computing it on first use."""
        words = self._words
        if words is not None:
            return words

        with self._lock:
            if self._words is None:
                words, settled = self._compute()
                if not settled:
                    return words
                self._words = words
            return self._words

    @property
    def is_fallback(self) -> bool:
        """Whether the resolved list is the built-in fallback."""
        return self.resolve() is FALLBACK_WORDS

    def invalidate(self) -> None:
        """Forget the memoized list; the shared cache is left alone."""
        with self._lock:
            self._words = None

    def purge(self) -> None:
        """Forget the memoized list and drop the shared cache entry."""
        with self._lock:
            self._words = None
            self.cache.delete(WORD_LIST_CACHE_KEY)

    def _compute(self) -> tuple[tuple[str, ...], bool]:
        """Compute the list.

        Returns:
            The words, and whether they may be memoized. Fallbacks caused
            by the shared cache itself are not memoized so the next call
            retries it.
        """
        if isinstance(self.config, InlineWords):
            words = tuple(self.config.words)
        else:
            document = self.config
            try:
                cached = self.cache.get_with_set_callback(
                    WORD_LIST_CACHE_KEY, self.ttl, lambda: self._fetch_words(document)
                )
            except Exception as e:
                logger.warning(
                    f"Word list cache failed for page {document.page_name}: {e}. "
                    "Using fallback list."
                )
                return FALLBACK_WORDS, False

            if cached is not None and not is_word_list(cached):
                logger.warning(
                    f"Discarding malformed cached word list for page {document.page_name} "
                    f"({type(cached).__name__}). Using fallback list."
                )
                self._discard_cached()
                return FALLBACK_WORDS, False

            words = tuple(cached) if cached else ()
            if not words:
                logger.warning("Configured word list is empty. Using fallback list.")
                return FALLBACK_WORDS, True

        if self.num_words <= 0 or self.num_words > len(words):
            logger.warning(
                f"Word count {self.num_words} is less than 1 or more than the "
                f"length of the list ({len(words)}). Using fallback list."
            )
            return FALLBACK_WORDS, True

        return words, True

    def _discard_cached(self) -> None:
        try:
            self.cache.delete(WORD_LIST_CACHE_KEY)
        except Exception as e:
            logger.warning(f"Could not drop cached word list: {e}")

    def _fetch_words(self, document: RemoteDocument) -> Optional[list[str]]:
        """Cache callback: fetch and parse the configured page.

        Returns None, which is never cached, when the page yields no words.
        """
        page_name = document.page_name

        try:
            text = self.fetch_page(document.target, page_name)
        except Exception as e:
            logger.warning(f"Failed to fetch word list page {page_name} from {document.target}: {e}")
            return None

        if text is None:
            logger.warning(f"No main slot on configured wiki page: {page_name}")
            return None
        if not isinstance(text, str) or not text:
            logger.warning(f"Empty content on configured wiki page: {page_name}")
            return None

        words = parse_word_lines(text)
        if not words:
            logger.warning(f"Only blank lines on configured wiki page: {page_name}")
            return None

        logger.info(f"Loaded {len(words)} words from {page_name} ({document.target})")
        return words
