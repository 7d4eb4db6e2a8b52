"""Adapter for worshipchords.com song pages.

URL pattern: worshipchords.com/<song-slug>-chords/

Page structure:
    <head>
        <title>Way Maker Chords - Sinach | Worship Chords</title>
        <meta property="og:title" content="Way Maker Chords - Sinach">
    </head>
    ...
    <div class="song-chords-content" data-key="E">
        <pre>chord/lyric lines, <br> for line breaks</pre>
    </div>

The ``og:title`` (or ``<title>``) value combines song and artist as
``"<Song> Chords - <Artist>"`` and is split by the metadata resolver.

Chord notation: unbracketed, space-aligned above lyrics, with bracketed
section labels such as ``[Verse 1]``.
"""

import logging

from bs4 import BeautifulSoup

from ..exceptions import NoChordContentError
from ..markup import class_contains, find_first, meta_content, node_text, tag_named, title_text
from ..metadata import find_declared_key, split_title
from ..models import ChordSheet, SongMetadata
from .base import SiteAdapter

logger = logging.getLogger(__name__)

CONTENT_CLASS = "song-chords-content"


class WorshipChordsAdapter(SiteAdapter):
    """Adapter for worshipchords.com song pages."""

    site = "worshipchords.com"

    @classmethod
    def can_handle(cls, url: str) -> bool:
        return "worshipchords.com" in url

    def extract(self, html: str, url: str) -> ChordSheet:
        self.validate_url(url)
        soup = BeautifulSoup(html, "html.parser")

        combined = meta_content(soup, "og:title") or title_text(soup)
        title, artist = split_title(combined)

        container = find_first(soup, class_contains(CONTENT_CLASS, name="div"))
        if container is None:
            raise NoChordContentError(url, f"Could not find <div class='{CONTENT_CLASS}'>")
        pre = find_first(container, tag_named("pre"))
        if pre is None:
            raise NoChordContentError(url, f"No <pre> inside {CONTENT_CLASS}")

        body = node_text(pre)
        if not body.strip():
            raise NoChordContentError(url, "No chord content found")

        # Only the container's own attributes and the chord text are consulted.
        key = container.get("data-key") or container.get("key") or find_declared_key(body)
        key = key.strip() if isinstance(key, str) else ""
        logger.debug("Extracted %r by %r (key %r) from %s", title, artist, key, url)

        return ChordSheet(
            metadata=SongMetadata(title=title, artist=artist, key=key, source_url=url),
            body=body,
        )
