"""Key detection and Nashville numbers for a finished chord-sheet body.

Chords are collected from inline brackets (``[G]``) and from lines made up
only of chord names (chords written above lyrics).  Each of the 24 major and
minor keys is scored by how many of those chords are diatonic to it, with
extra weight for the tonic; common keys win near-ties.

Nashville numbers are written relative to the detected tonic::

    G  → 1      Am → 2m     C  → 4      F  → b7     D/F# → 5/7
"""

import re

from .models import Analysis, ChordProgressionEntry

CHORD_RE = re.compile(
    r"(?P<root>[A-G][#b]?)"
    r"(?P<quality>maj|min|m|aug|dim|sus|add|\+|°)?"
    r"\d*(?:(?:sus|add|maj|b|#)\d+)*"
    r"(?:/(?P<bass>[A-Ga-g][#b]?))?"
)

_BRACKET_RE = re.compile(r"\[([^\]]+)\]")

PITCH_CLASSES = {
    "C": 0, "B#": 0, "C#": 1, "Db": 1, "D": 2, "D#": 3, "Eb": 3,
    "E": 4, "Fb": 4, "E#": 5, "F": 5, "F#": 6, "Gb": 6, "G": 7,
    "G#": 8, "Ab": 8, "A": 9, "A#": 10, "Bb": 10, "B": 11, "Cb": 11,
}

MAJOR_KEYS = ["C", "Db", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B"]
MINOR_KEYS = ["Cm", "C#m", "Dm", "Ebm", "Em", "Fm", "F#m", "Gm", "G#m", "Am", "Bbm", "Bm"]

# Diatonic triads as (semitones above the major tonic, quality).
_MAJOR_SCALE_TRIADS = [
    (0, "major"), (2, "minor"), (4, "minor"), (5, "major"),
    (7, "major"), (9, "minor"), (11, "dim"),
]

_DEGREES = ["1", "b2", "2", "b3", "3", "4", "b5", "5", "b6", "6", "b7", "7"]

# Preferred key order for tie-breaking
PREFERRED_KEYS = ["G", "C", "D", "A", "E", "Am", "Em", "Dm", "F", "Bm", "Bb", "Eb"]
_TIE_MARGIN = 0.03


def parse_chord(symbol: str) -> tuple[int, str, int | None] | None:
    """Return ``(root pitch class, quality, bass pitch class)`` or ``None``.

    Quality is one of ``"major"``, ``"minor"`` or ``"dim"``.
    """
    m = CHORD_RE.fullmatch(symbol.strip())
    if not m:
        return None
    quality = {"m": "minor", "min": "minor", "dim": "dim", "°": "dim"}.get(
        m.group("quality") or "", "major"
    )
    bass = m.group("bass")
    bass_pc = PITCH_CLASSES.get(bass[0].upper() + bass[1:]) if bass else None
    return PITCH_CLASSES[m.group("root")], quality, bass_pc


def extract_chords(body: str) -> list[str]:
    """Return every chord symbol in *body*, in order of appearance."""
    chords: list[str] = []
    for line in body.splitlines():
        bracketed = _BRACKET_RE.findall(line)
        if bracketed:
            chords.extend(t for t in bracketed if parse_chord(t))
            continue
        tokens = line.split()
        if tokens and all(parse_chord(t) for t in tokens):
            chords.extend(tokens)
    return chords


def _key_triads(key: str) -> tuple[int, str, set[tuple[int, str]]]:
    """Return ``(tonic pc, tonic quality, diatonic triads)`` for *key*."""
    if key.endswith("m"):
        tonic = PITCH_CLASSES[key[:-1]]
        major_tonic, tonic_quality = (tonic + 3) % 12, "minor"
    else:
        tonic = PITCH_CLASSES[key]
        major_tonic, tonic_quality = tonic, "major"
    triads = {((major_tonic + step) % 12, q) for step, q in _MAJOR_SCALE_TRIADS}
    return tonic, tonic_quality, triads


def detect_key(chords: list[str]) -> str:
    """Return the most likely key for *chords*, or ``""`` if there are none."""
    parsed = [p for p in (parse_chord(c) for c in chords) if p]
    if not parsed:
        return ""

    scores: dict[str, float] = {}
    for key in MAJOR_KEYS + MINOR_KEYS:
        tonic, tonic_quality, triads = _key_triads(key)
        weight = 0.0
        for root, quality, _ in parsed:
            if (root, quality) in triads:
                weight += 1
                if (root, quality) == (tonic, tonic_quality):
                    weight += 0.5
        scores[key] = weight / len(parsed)

    best_key = max(scores, key=scores.get)
    best_score = scores[best_key]
    if best_score == 0:
        return ""

    for key in PREFERRED_KEYS:
        if scores[key] >= best_score - _TIE_MARGIN:
            return key
    return best_key


def to_nashville(chord: str, key: str) -> str:
    """Return the Nashville number of *chord* in *key*, e.g. ``Em`` in G → ``6m``."""
    parsed = parse_chord(chord)
    if not parsed or not key:
        return chord
    root, quality, bass = parsed
    tonic = PITCH_CLASSES[key[:-1] if key.endswith("m") else key]

    number = _DEGREES[(root - tonic) % 12]
    if quality == "minor":
        number += "m"
    elif quality == "dim":
        number += "°"
    if bass is not None:
        number += "/" + _DEGREES[(bass - tonic) % 12]
    return number


def analyze(body: str) -> Analysis:
    """Detect the key of *body* and number each distinct chord in it.

    The progression lists each chord once, in first-occurrence order.  A body
    without recognisable chords yields an empty :class:`Analysis`.
    """
    chords = extract_chords(body)
    key = detect_key(chords)
    if not key:
        return Analysis()

    progression: list[ChordProgressionEntry] = []
    seen: set[str] = set()
    for chord in chords:
        if chord in seen:
            continue
        seen.add(chord)
        progression.append(ChordProgressionEntry(chord=chord, nashville=to_nashville(chord, key)))
    return Analysis(detected_key=key, progression=progression)
