"""Glue between extraction, normalization, analysis and rendering."""

import logging
from collections.abc import Callable

from .analysis import analyze
from .exceptions import NoChordContentError
from .models import Analysis, ChordSheet, SongMetadata
from .normalize import normalize_whitespace
from .render import OnSongRenderer
from .transcode import transcode

logger = logging.getLogger(__name__)

Analyzer = Callable[[str], Analysis]


def finalize(sheet: ChordSheet) -> ChordSheet:
    """Transcode and normalize ``sheet.body`` in place.

    Raises NoChordContentError if nothing but whitespace is left.
    """
    sheet.body = normalize_whitespace(transcode(sheet.body))
    if not sheet.body:
        raise NoChordContentError(sheet.metadata.source_url, "Chord content is empty")
    return sheet


def to_onsong(
    sheet: ChordSheet,
    analyzer: Analyzer = analyze,
    renderer: OnSongRenderer | None = None,
) -> str:
    """Finalize *sheet*, analyze its body once and render it."""
    finalize(sheet)
    analysis = analyzer(sheet.body)
    logger.debug(
        "Rendering %r: detected key %r, %d progression entries",
        sheet.metadata.title,
        analysis.detected_key,
        len(analysis.progression),
    )
    return (renderer or OnSongRenderer()).render(sheet, analysis)


def format_manual_submission(
    song: str,
    artist: str,
    content: str,
    key: str = "",
    analyzer: Analyzer = analyze,
) -> str:
    """Render user-supplied chord text with the Nashville annotations."""
    sheet = ChordSheet(metadata=SongMetadata(title=song, artist=artist, key=key), body=content)
    return to_onsong(sheet, analyzer=analyzer)
