"""Word split: expand each cue into one cue per word.

WHY: Timing karaoke by hand starts from a rough guess per word. The
split tool produces that guess: each word of a cue gets a slice of the
cue's duration proportional to its length, ready to be nudged in any
subtitle editor and then reassembled by the merge tool.

HOW: The payload is split on whitespace. With L the total character
count of all words, each character is worth (end - start) / L seconds.
Boundary i is start + (chars in words 1..i) * delta, computed from the
start every time, so rounding never accumulates; the last boundary is
the cue's own end. Rounding to milliseconds happens only when the
document is written.

RULES:
- Tags embedded in the payload are NOT stripped and count toward word
  length (durations are distorted for tagged payloads)
- A cue whose payload has no characters is dropped
- Output cues carry no id and no settings
- Non-cue blocks pass through unchanged
"""

from __future__ import annotations

import logging

from vtt_karaoke.core.blocks import parse_document, serialize_document
from vtt_karaoke.core.ir import Cue, Document, Section
from vtt_karaoke.transforms.base import BaseTransform, TransformOutput

logger = logging.getLogger(__name__)


def split_cue(cue: Cue) -> list[Cue]:
    """Split one cue into per-word cues with length-proportional durations.

    Returns:
        One Cue per whitespace-separated word, or [] if the payload is empty.
    """
    words = cue.text.split()
    total = sum(len(w) for w in words)
    if total == 0:
        return []

    delta = (cue.end - cue.start) / total
    result: list[Cue] = []
    consumed = 0
    boundary = cue.start
    for index, word in enumerate(words):
        consumed += len(word)
        if index == len(words) - 1:
            following = cue.end
        else:
            following = cue.start + consumed * delta
        result.append(Cue(start=boundary, end=following, text=word))
        boundary = following
    return result


def split_document(document: str) -> str:
    """Expand every cue of a document into word cues; keep other blocks."""
    parsed = parse_document(document)
    sections: list[Section] = []
    cue_count = 0
    word_count = 0
    for section in parsed.sections:
        if isinstance(section, Cue):
            words = split_cue(section)
            cue_count += 1
            word_count += len(words)
            sections.extend(words)
        else:
            sections.append(section)
    logger.info("Split %d cues into %d word cues", cue_count, word_count)
    return serialize_document(Document(sections=sections, trailer=parsed.trailer))


class SplitTransform(BaseTransform):
    """Transform that writes ``{stem}-words.vtt`` with one cue per word."""

    @property
    def name(self) -> str:
        return "Word split"

    def apply(self, document: str) -> TransformOutput:
        return TransformOutput(suffix="-words.vtt", content=split_document(document))
