"""Block parser: blank-line sections, cue recognition, serialization.

WHY: Timed-text files interleave cue blocks with blocks the tools must
not touch (the WEBVTT header, STYLE and NOTE blocks, anything an author
mistyped). The tools only need to know which blocks are cues; every
other block has to survive a round trip exactly.

HOW: split_sections() cuts the document on runs of blank lines and
remembers the newline run that ended it. parse_cue() decides whether a
block is a cue: an optional id line, a ``<time> --> <time> [settings]``
line, then at least one payload line. parse_document() applies it to
every block; serialize_document() writes a Document back.

RULES:
- A block boundary is two or more consecutive line breaks (\\n or \\r\\n)
- Output blocks are joined with a single blank line ("\\n\\n")
- A block whose timing line has the right shape but unreadable times
  (FormatError) is opaque, never an error
- Cue ids and settings are dropped from parsed cues
- Opaque blocks keep their original internal line breaks
"""

from __future__ import annotations

import logging
import re

from vtt_karaoke.core.ir import Cue, Document, OpaqueSection, Section
from vtt_karaoke.core.timecode import FormatError, format_time, parse_time

logger = logging.getLogger(__name__)

SECTION_SPLIT_RE = re.compile(r"(?:\r?\n){2,}")
LINE_SPLIT_RE = re.compile(r"\r?\n")
TIMING_RE = re.compile(r"^(\d[\d:.]*)[ \t]+-->[ \t]+(\d[\d:.]*)(?:[ \t]+(.*))?$")

SECTION_SEPARATOR = "\n\n"


def split_sections(text: str) -> tuple[list[str], str]:
    """Split a document into blank-line-delimited blocks.

    Returns:
        Tuple of (blocks, trailer) where trailer is the run of line
        breaks that ended the input ("" if none).
    """
    body = text.rstrip("\r\n")
    trailer = text[len(body):]
    if not body:
        return [], trailer
    return SECTION_SPLIT_RE.split(body), trailer


def join_sections(sections: list[str], trailer: str = "") -> str:
    """Inverse of split_sections, normalizing block separators to one blank line."""
    return SECTION_SEPARATOR.join(sections) + trailer


def split_lines(section: str) -> list[str]:
    return LINE_SPLIT_RE.split(section)


def parse_timing(line: str) -> tuple[float, float, str] | None:
    """Read a ``<time> --> <time> [settings]`` line.

    Returns:
        (start, end, settings) or None if the line is not shaped like a
        timing line. settings is "" when absent.

    Raises:
        FormatError: If the line is shaped like a timing line but one of
            the times does not follow the time-code grammar.
    """
    match = TIMING_RE.match(line)
    if match is None:
        return None
    start_text, end_text, settings = match.groups()
    return parse_time(start_text), parse_time(end_text), settings or ""


def parse_cue(section: str) -> Cue | None:
    """Parse one block as a cue, or return None if it is not one.

    WHY: Every non-cue block must pass through the tools unchanged, so
    "not a cue" is a normal answer here rather than an error.

    HOW: The timing line is either the first line (no id) or the second
    line (first line is the id). Everything after it is payload.

    RULES:
    - At least one payload line is required
    - FormatError from the timing line makes the block opaque
    """
    lines = split_lines(section)
    timing_index = None
    for index in (0, 1):
        if index < len(lines) and TIMING_RE.match(lines[index]):
            timing_index = index
            break
    if timing_index is None:
        return None

    payload = lines[timing_index + 1:]
    if not payload:
        return None

    try:
        timing = parse_timing(lines[timing_index])
    except FormatError as e:
        logger.debug("Treating block as opaque: %s", e)
        return None
    if timing is None:
        return None

    start, end, _settings = timing
    return Cue(start=start, end=end, text="\n".join(payload))


def parse_document(text: str) -> Document:
    """Parse a whole document into cue and opaque sections, in input order."""
    blocks, trailer = split_sections(text)
    sections: list[Section] = []
    for block in blocks:
        cue = parse_cue(block)
        sections.append(cue if cue is not None else OpaqueSection(text=block))
    return Document(sections=sections, trailer=trailer)


def format_cue(cue: Cue) -> str:
    """Serialize a cue as a timing line plus its payload (no id, no settings)."""
    return "{} --> {}\n{}".format(format_time(cue.start), format_time(cue.end), cue.text)


def serialize_document(document: Document) -> str:
    blocks = []
    for section in document.sections:
        if isinstance(section, Cue):
            blocks.append(format_cue(section))
        else:
            blocks.append(section.text)
    return join_sections(blocks, document.trailer)
