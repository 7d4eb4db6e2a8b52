"""OnSong sheet renderer.

Renders a finished :class:`~tab2onsong.models.ChordSheet` as an OnSong text
block: a short metadata header, a blank line, then the body.

Header layout
-------------

+--------------------------------------------+-------------------------------+
| Line                                       | When                          |
+============================================+===============================+
| ``<Title>``                                | always                        |
+--------------------------------------------+-------------------------------+
| ``<Artist>``                               | artist is non-empty           |
+--------------------------------------------+-------------------------------+
| ``Key: <key>``                             | a key was detected or declared|
+--------------------------------------------+-------------------------------+
| ``Tempo: 100 BPM``                         | always (placeholder)          |
+--------------------------------------------+-------------------------------+
| ``Time Signature: 4/4``                    | placeholder is non-empty      |
+--------------------------------------------+-------------------------------+
| ``Nashville Number System: G=1, C=4``      | analysis found chords         |
+--------------------------------------------+-------------------------------+
| ``General Progression: 1 - 4``             | analysis found chords         |
+--------------------------------------------+-------------------------------+

Usage::

    from tab2onsong.render import OnSongRenderer
    text = OnSongRenderer().render(sheet, analysis)
"""

from .config import TEMPO_PLACEHOLDER, TIME_SIGNATURE_PLACEHOLDER
from .metadata import resolve_key
from .models import Analysis, ChordSheet


class OnSongRenderer:
    """Render a :class:`~tab2onsong.models.ChordSheet` to OnSong text."""

    def __init__(
        self,
        tempo: str = TEMPO_PLACEHOLDER,
        time_signature: str = TIME_SIGNATURE_PLACEHOLDER,
    ):
        self.tempo = tempo
        self.time_signature = time_signature

    def render(self, sheet: ChordSheet, analysis: Analysis | None = None) -> str:
        """Return OnSong text for *sheet*.

        *analysis* supplies the detected key and the Nashville progression;
        without it the declared key is used and no progression lines are
        written.  The returned string ends with a single newline.
        """
        analysis = analysis or Analysis()
        meta = sheet.metadata
        parts: list[str] = [meta.title]

        if meta.artist:
            parts.append(meta.artist)
        key = resolve_key(analysis.detected_key, meta.key)
        if key:
            parts.append(f"Key: {key}")
        parts.append(f"Tempo: {self.tempo}")
        if self.time_signature:
            parts.append(f"Time Signature: {self.time_signature}")
        parts.extend(_progression_lines(analysis))

        parts.append("")
        parts.append(sheet.body)
        return "\n".join(parts) + "\n"


def _progression_lines(analysis: Analysis) -> list[str]:
    if not analysis.progression:
        return []
    pairs = ", ".join(f"{p.chord}={p.nashville}" for p in analysis.progression)
    numbers = " - ".join(p.nashville for p in analysis.progression)
    return [
        f"Nashville Number System: {pairs}",
        f"General Progression: {numbers}",
    ]
