"""Typed view of the ``wordnames`` configuration section."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import ConfigurationError
from .models import InlineWords, RemoteDocument, WordListConfig, resolve_deployment_target

logger = logging.getLogger(__name__)

DEFAULT_LENGTH = 3
DEFAULT_USE_INDEX = True
DEFAULT_OFFSET = 0


def _coerce_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "y"}:
            return True
        if lowered in {"false", "0", "no", "n"}:
            return False
    return default


def _coerce_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def build_word_list_config(
    list_config: Any,
    central_wiki: Optional[str] = None,
    current_wiki: Optional[str] = None,
) -> WordListConfig:
    """Turn the raw ``list`` setting into a WordListConfig.

    Args:
        list_config: Mapping with either ``words`` or ``page``
        central_wiki: Wiki holding the page, defaults to the current one
        current_wiki: Identity of the wiki this process serves

    Raises:
        ConfigurationError: If no usable list is configured
    """
    if not list_config or not isinstance(list_config, dict):
        raise ConfigurationError("wordnames.list must be defined")

    if list_config.get("words") is not None:
        if list_config.get("page"):
            logger.warning("Both words and page are configured; using the inline words")
        words = list_config["words"]
        if isinstance(words, str) or not isinstance(words, (list, tuple)):
            raise ConfigurationError("wordnames.list.words must be a list of strings")
        return InlineWords(words=tuple(str(w) for w in words))

    page = _coerce_str(list_config.get("page"))
    if page:
        return RemoteDocument(
            page_name=page,
            target=resolve_deployment_target(central_wiki, current_wiki),
        )

    raise ConfigurationError("wordnames.list needs either 'words' or 'page'")


@dataclass(frozen=True)
class WordNamesSettings:
    """Settings consumed by the serial mapping."""

    word_list: WordListConfig
    length: int = DEFAULT_LENGTH
    use_index: bool = DEFAULT_USE_INDEX
    offset: int = DEFAULT_OFFSET
    wiki_id: Optional[str] = None

    @classmethod
    def from_config(cls, config: dict) -> "WordNamesSettings":
        """Build settings from the full application config.

        Raises:
            ConfigurationError: If the word list is not configured
        """
        section = config.get("wordnames") or {}
        if not isinstance(section, dict):
            raise ConfigurationError("wordnames section must be a mapping")

        wiki_id = _coerce_str(section.get("wiki_id"))
        word_list = build_word_list_config(
            section.get("list"),
            central_wiki=_coerce_str(section.get("central_wiki")),
            current_wiki=wiki_id,
        )

        return cls(
            word_list=word_list,
            length=_coerce_int(section.get("length"), DEFAULT_LENGTH),
            use_index=_coerce_bool(section.get("use_index"), DEFAULT_USE_INDEX),
            offset=_coerce_int(section.get("offset"), DEFAULT_OFFSET),
            wiki_id=wiki_id,
        )
