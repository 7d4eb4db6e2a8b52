import re

_EXCESS_BLANKS_RE = re.compile(r"\n{4,}")


def normalize_whitespace(text: str) -> str:
    """Tidy blank lines and line endings in a transcoded body.

    - trailing spaces/tabs are stripped from every line; leading and
      interior whitespace is kept (chords are aligned by column)
    - blank lines at the top are dropped
    - runs of three or more blank lines become exactly two
    - blank lines at either end of the result are trimmed
    """
    lines: list[str] = []
    for line in text.replace("\r\n", "\n").split("\n"):
        cleaned = line.rstrip(" \t")
        if not lines and not cleaned:
            continue
        lines.append(cleaned)

    result = "\n".join(lines)
    # Two blank lines are three consecutive newlines.
    result = _EXCESS_BLANKS_RE.sub("\n\n\n", result)
    return result.strip("\n")
