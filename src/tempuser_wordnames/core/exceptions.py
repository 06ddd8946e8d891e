"""Custom exceptions for tempuser-wordnames."""


class WordNamesError(Exception):
    """Base exception for tempuser-wordnames."""

    pass


class ConfigurationError(WordNamesError):
    """Word list configuration is missing or unusable."""

    pass


class FetchError(WordNamesError):
    """Fetching a word list page failed."""

    pass
