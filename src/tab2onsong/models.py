from dataclasses import dataclass, field


@dataclass
class SongMetadata:
    """Header fields of a song, filled in progressively by the extractor."""

    title: str
    artist: str = ""
    key: str = ""  # source-declared key, e.g. "G" or "Em"
    source_url: str = ""


@dataclass
class ChordSheet:
    """A song travelling through the pipeline.

    ``body`` holds the raw chord/lyric text as extracted and is rewritten in
    place by each stage.
    """

    metadata: SongMetadata
    body: str


@dataclass
class ChordProgressionEntry:
    """A chord symbol and its Nashville number, e.g. ``Am`` → ``6m``."""

    chord: str
    nashville: str


@dataclass
class Analysis:
    """Result of key/progression analysis over a finished body."""

    detected_key: str = ""
    progression: list[ChordProgressionEntry] = field(default_factory=list)
