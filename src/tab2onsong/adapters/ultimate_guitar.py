"""Adapter for tabs.ultimate-guitar.com chord pages.

A song can be addressed by its page URL or by its numeric tab id; an id is
turned into ``https://tabs.ultimate-guitar.com/tab/<id>``, which UG redirects
to the canonical page.

Two page formats are supported:

Current format:
    <div class="js-store" data-content="<html-entity-encoded JSON>">
    JSON path:
        store.page.data.tab
            .song_name        → SongMetadata.title
            .artist_name      → SongMetadata.artist
            .tonality_name    → SongMetadata.key
        store.page.data.tab_view
            .wiki_tab.content → raw body

Legacy format (Next.js):
    <script id="__NEXT_DATA__" type="application/json">
    JSON path:
        props.pageProps.data.tab_view
            .song_name / .artist_name / .tonality_name
            .wiki_tab.content

The body keeps UG's ``[tab]...[/tab]`` and ``[ch]D[/ch]`` tokens; they are
rewritten by :mod:`tab2onsong.transcode`.
"""

import html as html_module
import json
import logging

from bs4 import BeautifulSoup

from ..exceptions import NoChordContentError
from ..markup import class_contains, find_first
from ..models import ChordSheet, SongMetadata
from .base import SiteAdapter

logger = logging.getLogger(__name__)

TAB_URL = "https://tabs.ultimate-guitar.com/tab/{tab_id}"


def _extract_page_data(soup: BeautifulSoup, url: str) -> dict:
    """Return the ``page.data`` dict from whichever JSON container is present.

    Tries the current ``js-store`` format first, then falls back to the
    legacy ``__NEXT_DATA__`` format.

    Raises :class:`~tab2onsong.exceptions.NoChordContentError` if neither is
    found or can be parsed.
    """
    # --- Current format: <div class="js-store" data-content="..."> ---
    store_div = find_first(soup, class_contains("js-store", name="div"))
    if store_div and store_div.get("data-content"):
        try:
            data = json.loads(html_module.unescape(store_div["data-content"]))
            page_data = data["store"]["page"]["data"]
            if isinstance(page_data, dict):
                return page_data
        except (KeyError, TypeError, json.JSONDecodeError):
            logger.debug("js-store present but unusable on %s", url)

    # --- Legacy format: <script id="__NEXT_DATA__"> ---
    script_tag = soup.find("script", id="__NEXT_DATA__")
    if script_tag and script_tag.string:
        try:
            data = json.loads(script_tag.string)
            page_data = data["props"]["pageProps"]["data"]
            if isinstance(page_data, dict):
                return page_data
        except (KeyError, TypeError, json.JSONDecodeError):
            logger.debug("__NEXT_DATA__ present but unusable on %s", url)

    raise NoChordContentError(url, "Could not find tab data (tried js-store and __NEXT_DATA__)")


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


class UltimateGuitarAdapter(SiteAdapter):
    """Adapter for tabs.ultimate-guitar.com chord pages."""

    site = "tabs.ultimate-guitar.com"

    @classmethod
    def can_handle(cls, url: str) -> bool:
        return "tabs.ultimate-guitar.com/tab/" in url

    @staticmethod
    def url_for(identifier: str | int) -> str:
        """Return a page URL for a tab id; URLs are returned unchanged."""
        identifier = str(identifier).strip()
        if identifier.isdigit():
            return TAB_URL.format(tab_id=identifier)
        return identifier

    def extract(self, html: str, url: str) -> ChordSheet:
        self.validate_url(url)
        soup = BeautifulSoup(html, "html.parser")
        page_data = _extract_page_data(soup, url)

        # Metadata lives in page_data["tab"] (current) or page_data["tab_view"] (legacy).
        tab_view = _as_dict(page_data.get("tab_view"))
        tab_meta = _as_dict(page_data.get("tab")) or tab_view

        title = tab_meta.get("song_name") or ""
        artist = tab_meta.get("artist_name") or ""
        key = tab_meta.get("tonality_name") or tab_view.get("tonality_name") or ""

        content = _as_dict(tab_view.get("wiki_tab")).get("content")
        if not isinstance(content, str) or not content.strip():
            raise NoChordContentError(url, "wiki_tab.content is empty or missing")

        return ChordSheet(
            metadata=SongMetadata(title=title, artist=artist, key=key, source_url=url),
            body=content,
        )
