"""Data models for tempuser-wordnames."""

from dataclasses import dataclass
from typing import Callable, Optional, Union


@dataclass(frozen=True)
class LocalDeployment:
    """The wiki this process is serving."""

    def __str__(self) -> str:
        return "local"


@dataclass(frozen=True)
class NamedDeployment:
    """Another wiki, addressed by its identity (database name)."""

    identity: str

    def __str__(self) -> str:
        return self.identity


DeploymentTarget = Union[LocalDeployment, NamedDeployment]

LOCAL = LocalDeployment()


def resolve_deployment_target(
    central_wiki: Optional[str],
    current_wiki: Optional[str],
) -> DeploymentTarget:
    """Decide where the word list page lives.

    Args:
        central_wiki: Configured central wiki id, if any
        current_wiki: Identity of the wiki this process serves

    Returns:
        LOCAL when the page lives on the current wiki, otherwise a
        NamedDeployment for the central wiki
    """
    target = central_wiki or current_wiki
    if not target or target == current_wiki:
        return LOCAL
    return NamedDeployment(target)


@dataclass(frozen=True)
class InlineWords:
    """Word list given directly in configuration."""

    words: tuple[str, ...]


@dataclass(frozen=True)
class RemoteDocument:
    """Word list read from a wiki page, one word per line."""

    page_name: str
    target: DeploymentTarget = LOCAL


WordListConfig = Union[InlineWords, RemoteDocument]


@dataclass(frozen=True)
class GenerationRequest:
    """A request for one identifier."""

    index: int
    use_index: bool = True


# Returns the raw main-slot text of a page, or None when unavailable
PageFetcher = Callable[[DeploymentTarget, str], Optional[str]]
