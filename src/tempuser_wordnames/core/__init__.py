"""Core components: word list resolution, caching and name sampling."""

from .exceptions import ConfigurationError, FetchError, WordNamesError
from .models import (
    LOCAL,
    DeploymentTarget,
    GenerationRequest,
    InlineWords,
    LocalDeployment,
    NamedDeployment,
    PageFetcher,
    RemoteDocument,
    WordListConfig,
    resolve_deployment_target,
)
from .object_cache import (
    TTL_HOUR,
    MemoryObjectCache,
    ObjectCache,
    SqliteObjectCache,
    create_object_cache,
    make_global_key,
)
from .resolver import FALLBACK_WORDS, WORD_LIST_CACHE_KEY, WordListResolver
from .sampler import IdentifierSampler
from .settings import WordNamesSettings, build_word_list_config
from .serial_mapping import WordNamesSerialMapping

__all__ = [
    # Serial mapping
    "WordNamesSerialMapping",
    # Resolver
    "WordListResolver",
    "FALLBACK_WORDS",
    "WORD_LIST_CACHE_KEY",
    # Sampler
    "IdentifierSampler",
    # Settings
    "WordNamesSettings",
    "build_word_list_config",
    # Cache
    "ObjectCache",
    "MemoryObjectCache",
    "SqliteObjectCache",
    "create_object_cache",
    "make_global_key",
    "TTL_HOUR",
    # Models
    "DeploymentTarget",
    "LocalDeployment",
    "NamedDeployment",
    "LOCAL",
    "resolve_deployment_target",
    "InlineWords",
    "RemoteDocument",
    "WordListConfig",
    "GenerationRequest",
    "PageFetcher",
    # Exceptions
    "WordNamesError",
    "ConfigurationError",
    "FetchError",
]
