"""Rewrite site markup tokens into OnSong chord-sheet syntax.

The steps run in a fixed order:

  1. strip_tab_markers()            : ``[tab]`` / ``[/tab]`` removed
  2. replace_chord_markers()        : ``[ch]D[/ch]`` → ``[D]``
  3. canonicalize_section_headers() : ``[Verse 1]`` → ``Verse 1:``

Only labels from :data:`SECTION_LABELS` are treated as section headers.  A
line such as ``[Am]`` or ``[Riff]`` is left alone so that chord brackets are
never mistaken for a section.
"""

import re

# Section labels recognised as headers.  Each entry is a regex fragment
# matched case-insensitively against the whole bracketed text.
SECTION_LABELS: tuple[str, ...] = (
    r"Intro",
    r"Verse(?:[ \t]*\d+)?",
    r"Chorus(?:[ \t]*\d+)?",
    r"Pre-Chorus",
    r"Bridge",
    r"Instrumental",
    r"Interlude",
    r"Turnaround",
    r"Outro",
    r"Tag",
    r"Ending",
    r"Solo",
    r"Break",
    r"Refrain",
    r"Coda",
    r"Hook",
    r"Vamp",
    r"Outro Chorus",
)

SECTION_HEADER_RE = re.compile(
    r"\[(" + "|".join(SECTION_LABELS) + r")[ \t]*\]",
    re.IGNORECASE,
)

_TAB_MARKER_RE = re.compile(r"\[/?tab\]")


def strip_tab_markers(text: str) -> str:
    return _TAB_MARKER_RE.sub("", text)


def replace_chord_markers(text: str) -> str:
    return text.replace("[ch]", "[").replace("[/ch]", "]")


def canonicalize_section_headers(text: str) -> str:
    """Rewrite lines consisting solely of ``[<label>]`` as ``<label>:``.

    The label keeps the spelling used in the source (``[CHORUS]`` becomes
    ``CHORUS:``).  Lines with anything besides the bracketed label are
    returned unchanged.
    """
    lines = text.split("\n")
    for i, line in enumerate(lines):
        m = SECTION_HEADER_RE.fullmatch(line.strip())
        if m:
            lines[i] = f"{m.group(1)}:"
    return "\n".join(lines)


def transcode(text: str) -> str:
    """Apply all transcoding steps to *text* in order."""
    text = strip_tab_markers(text)
    text = replace_chord_markers(text)
    return canonicalize_section_headers(text)
