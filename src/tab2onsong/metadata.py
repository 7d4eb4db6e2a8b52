"""Title/artist splitting and key resolution."""

import re

from .config import PREFER_DETECTED_KEY

TITLE_SEPARATOR = " - "
_CHORDS_SUFFIX = " Chords"

# Matches key="G" as well as data-key="G"
_DECLARED_KEY_RE = re.compile(r'(?<![\w-])(?:data-)?key="([^"]+)"')


def split_title(combined: str) -> tuple[str, str]:
    """Split ``"<Song> Chords - <Artist>"`` into ``(song, artist)``.

    Splits on the first ``" - "``; everything after it is the artist.  A
    single trailing ``" Chords"`` is removed from the song part.  Without a
    separator the whole string is returned as the title, untouched, with an
    empty artist.
    """
    if TITLE_SEPARATOR not in combined:
        return combined, ""
    song, _, artist = combined.partition(TITLE_SEPARATOR)
    song = song.rstrip().removesuffix(_CHORDS_SUFFIX)
    return song.strip(), artist.strip()


def find_declared_key(text: str) -> str:
    """Return the value of the first ``key="..."`` token in *text*, or ``""``."""
    m = _DECLARED_KEY_RE.search(text)
    return m.group(1) if m else ""


def resolve_key(detected: str, declared: str) -> str:
    """Pick exactly one key for rendering.

    The detected key wins when present, otherwise the declared key is used
    as-is.  An empty result means no key line is rendered.
    """
    if PREFER_DETECTED_KEY and detected:
        return detected
    return declared or detected
