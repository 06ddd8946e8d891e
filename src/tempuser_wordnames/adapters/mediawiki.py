"""Page content fetcher backed by the MediaWiki Action API."""

import logging
from typing import Optional

import httpx

from ..core.exceptions import FetchError
from ..core.models import DeploymentTarget, LocalDeployment

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
USER_AGENT = "tempuser-wordnames/0.1 (word list fetcher)"


def build_revision_query(page_name: str) -> dict:
    """Query parameters for the latest main-slot content of a page."""
    return {
        "action": "query",
        "prop": "revisions",
        "rvprop": "content",
        "rvslots": "main",
        "titles": page_name,
        "format": "json",
        "formatversion": "2",
    }


def extract_main_slot_text(payload: dict) -> Optional[str]:
    """Pull the main slot text out of a formatversion=2 query response.

    Returns:
        The text, or None if the page, revision or slot is missing

    Raises:
        FetchError: If the API reported an error
    """
    if not isinstance(payload, dict):
        raise FetchError("Unexpected response shape")
    if "error" in payload:
        error = payload["error"] or {}
        raise FetchError(f"API error {error.get('code')}: {error.get('info')}")

    pages = (payload.get("query") or {}).get("pages") or []
    if not pages:
        return None

    page = pages[0]
    if page.get("missing") or page.get("invalid"):
        return None

    revisions = page.get("revisions") or []
    if not revisions:
        return None

    main = (revisions[0].get("slots") or {}).get("main") or {}
    content = main.get("content")
    return content if isinstance(content, str) else None


class MediaWikiPageFetcher:
    """Fetches the main-slot text of a page on a local or named wiki.

    Wikis are addressed by identity (database name) and mapped to their
    api.php endpoints via ``api_urls``. The fetcher never raises: failures
    are logged and reported as None.
    """

    def __init__(
        self,
        api_urls: dict[str, str],
        local_wiki: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        self.api_urls = dict(api_urls)
        self.local_wiki = local_wiki
        self.timeout = timeout
        self._client = client

    def api_url_for(self, target: DeploymentTarget) -> Optional[str]:
        """Get the api.php URL for a deployment target."""
        if isinstance(target, LocalDeployment):
            if self.local_wiki is None:
                return None
            return self.api_urls.get(self.local_wiki)
        return self.api_urls.get(target.identity)

    def _get(self, url: str, params: dict) -> httpx.Response:
        headers = {"User-Agent": USER_AGENT}
        if self._client is not None:
            return self._client.get(url, params=params, headers=headers, timeout=self.timeout)
        return httpx.get(url, params=params, headers=headers, timeout=self.timeout)

    def fetch(self, target: DeploymentTarget, page_name: str) -> Optional[str]:
        """Fetch page text.

        Raises:
            FetchError: On transport, HTTP or API errors
        """
        url = self.api_url_for(target)
        if url is None:
            raise FetchError(f"No API endpoint configured for wiki '{target}'")

        try:
            response = self._get(url, build_revision_query(page_name))
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP {e.response.status_code} from {url}") from e
        except httpx.RequestError as e:
            raise FetchError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {url}") from e

        return extract_main_slot_text(payload)

    def __call__(self, target: DeploymentTarget, page_name: str) -> Optional[str]:
        try:
            return self.fetch(target, page_name)
        except FetchError as e:
            logger.warning(f"Could not fetch {page_name} from {target}: {e}")
            return None
