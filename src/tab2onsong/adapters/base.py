import logging
from abc import ABC, abstractmethod

import httpx

from ..config import FETCH_TIMEOUT
from ..exceptions import FetchError, InvalidSourceError
from ..models import ChordSheet

logger = logging.getLogger(__name__)

FETCH_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/webp,*/*;q=0.8"
    ),
}


class SiteAdapter(ABC):
    """Abstract base class for all site-specific adapters."""

    site: str = ""
    timeout: float = FETCH_TIMEOUT

    @classmethod
    @abstractmethod
    def can_handle(cls, url: str) -> bool:
        """Return True if this adapter can handle the given URL."""

    def validate_url(self, url: str) -> None:
        """Raise InvalidSourceError unless *url* belongs to this adapter's site."""
        if not self.can_handle(url):
            raise InvalidSourceError(url, f"URL must be from {self.site}")

    def fetch(self, url: str) -> str:
        """Fetch the page at url and return raw HTML.

        Raises FetchError on transport failures and non-2xx responses.
        """
        logger.debug("Fetching %s", url)
        try:
            resp = httpx.get(
                url,
                headers=FETCH_HEADERS,
                follow_redirects=True,
                timeout=self.timeout,
            )
        except httpx.RequestError as exc:
            raise FetchError(url, 0) from exc
        if not resp.is_success:
            raise FetchError(url, resp.status_code)
        return resp.text

    @abstractmethod
    def extract(self, html: str, url: str) -> ChordSheet:
        """Parse HTML and return a ChordSheet with the raw, untranscoded body.

        Raises InvalidSourceError if *url* is not from this adapter's site,
        and NoChordContentError if the chord content cannot be found.
        """

    def scrape(self, url: str) -> ChordSheet:
        """Convenience method: validate + fetch + extract."""
        self.validate_url(url)
        html = self.fetch(url)
        return self.extract(html, url)
