"""Intermediate representation for timed-text documents.

WHY: Both offline tools read a document, change some of its cue blocks
and write everything else back untouched. A small typed IR keeps the
"is this a cue?" decision in one place (the block parser) and lets the
tools work on cues without re-parsing header lines.

HOW: A Document is an ordered list of sections plus the newline run
that ended the input. Each section is either a Cue (parsed timing and
payload) or an OpaqueSection (the original block text, kept verbatim).

RULES:
- Times are float seconds, never rounded in the IR
- start <= end is assumed, never enforced
- Cue ids and cue settings are discarded by the parser
- OpaqueSection.text is byte-for-byte the input block, internal line
  breaks included
- IR objects are frozen; tools build new ones instead of mutating
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Cue:
    """One timed block of text.

    RULES:
    - text: payload lines joined with "\\n" (the split tool treats any
      whitespace, newlines included, as a word boundary)
    """

    start: float
    end: float
    text: str


@dataclass(frozen=True)
class OpaqueSection:
    """A block that is not a cue: header, STYLE/NOTE, blank or malformed."""

    text: str


Section = Union[Cue, OpaqueSection]


@dataclass(frozen=True)
class Document:
    """A parsed document: sections in input order plus the trailing newlines.

    RULES:
    - trailer is the run of newline characters that ended the input
      ("" when the input did not end with a newline)
    """

    sections: list[Section] = field(default_factory=list)
    trailer: str = ""

    @property
    def cues(self) -> list[Cue]:
        return [s for s in self.sections if isinstance(s, Cue)]
