class Tab2OnSongError(Exception):
    """Base exception for tab2onsong."""


class FetchError(Tab2OnSongError):
    """Raised when an HTTP request fails."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class ExtractionError(Tab2OnSongError):
    """Raised when a song cannot be extracted from a page."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Extraction error for {url}: {reason}")


class InvalidSourceError(ExtractionError):
    """Raised when a URL does not belong to the adapter's site."""


class NoChordContentError(ExtractionError):
    """Raised when the page has no chord/lyric content to extract."""


class MalformedInputError(Tab2OnSongError):
    """Raised when a request fails basic structural validation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class WebhookError(Tab2OnSongError):
    """Raised when the forwarding webhook fails or rejects a submission."""

    def __init__(self, status_code: int, message: str, body: bytes = b""):
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"HTTP {status_code}: {message}")


class UnsupportedSiteError(Tab2OnSongError):
    """Raised when no adapter matches the given URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No adapter found for URL: {url}")
