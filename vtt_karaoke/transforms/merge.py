"""Karaoke merge: reassemble word cues into cues with timestamp markers.

WHY: After word timings have been refined, the words must go back into
ordinary cues so a player shows whole lines. The timing is kept inside
the payload as ``<time>`` markers, which the playback tracker uses to
highlight one segment at a time.

HOW: The author marks which word cues belong together by removing the
blank lines between them, so each block may hold several consecutive
word cues (a timing line followed by exactly one word line). Each run
of consecutive word cues becomes one cue: the first word, then for
every following word a marker at the previous word's end, an extra
marker at the word's own start when the pause before it exceeds
gap_time, then the word.

RULES:
- Time texts are copied verbatim from the word cues (no reformatting)
- The merged timing line keeps the first word cue's settings
- Lines that are not part of a word cue (e.g. a cue id) stay in place
- A block without any word cue is returned unchanged
- gap_time only controls the extra pause marker; parsing ignores it
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Union

from vtt_karaoke.config import load_merge_options
from vtt_karaoke.core.blocks import (
    TIMING_RE,
    join_sections,
    parse_timing,
    split_lines,
    split_sections,
)
from vtt_karaoke.core.timecode import FormatError
from vtt_karaoke.transforms.base import BaseTransform, TransformOutput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordCue:
    """A timing line plus its single word line, as written in the block."""

    start_text: str
    end_text: str
    start: float
    end: float
    settings: str
    word: str


_Run = Union[str, List[WordCue]]


def _read_word_cue(timing_line: str, word_line: str) -> WordCue | None:
    if TIMING_RE.match(word_line):
        return None
    try:
        timing = parse_timing(timing_line)
    except FormatError:
        return None
    if timing is None:
        return None
    match = TIMING_RE.match(timing_line)
    start, end, settings = timing
    return WordCue(
        start_text=match.group(1),
        end_text=match.group(2),
        start=start,
        end=end,
        settings=settings,
        word=word_line,
    )


def find_word_cues(lines: list[str]) -> list[_Run]:
    """Partition block lines into plain lines and runs of consecutive word cues.

    Returns:
        A list whose items are either a plain line (str) or a non-empty
        list of WordCue objects that were adjacent in the block.
    """
    runs: list[_Run] = []
    index = 0
    while index < len(lines):
        word_cue = None
        if index + 1 < len(lines):
            word_cue = _read_word_cue(lines[index], lines[index + 1])
        if word_cue is None:
            runs.append(lines[index])
            index += 1
            continue
        if runs and isinstance(runs[-1], list):
            runs[-1].append(word_cue)
        else:
            runs.append([word_cue])
        index += 2
    return runs


def merge_words(words: list[WordCue], gap_time: float) -> tuple[str, str]:
    """Build the timing line and marked-up payload for one run of word cues.

    Returns:
        (timing_line, payload)
    """
    first, last = words[0], words[-1]
    parts = [first.word]
    for previous, word in zip(words, words[1:]):
        parts.append(" <{}>".format(previous.end_text))
        # Times carry millisecond precision; compare without float noise.
        if round(word.start - previous.end, 6) > gap_time:
            parts.append("<{}>".format(word.start_text))
        parts.append(word.word)

    timing = "{} --> {}".format(first.start_text, last.end_text)
    if first.settings:
        timing += " " + first.settings
    return timing, "".join(parts)


def merge_section(section: str, gap_time: float = 1.0) -> str:
    """Merge every run of word cues inside one block."""
    runs = find_word_cues(split_lines(section))
    if not any(isinstance(run, list) for run in runs):
        return section

    lines: list[str] = []
    for run in runs:
        if isinstance(run, list):
            lines.extend(merge_words(run, gap_time))
        else:
            lines.append(run)
    return "\n".join(lines)


def merge_document(document: str, gap_time: float | None = None) -> str:
    """Merge word cues in every block of a document.

    Args:
        document: The complete input document text.
        gap_time: Pause threshold in seconds; None uses VTT_KARAOKE_GAP_TIME
            (default 1.0).
    """
    options = load_merge_options(gap_time)
    blocks, trailer = split_sections(document)
    merged = [merge_section(block, options.gap_time) for block in blocks]
    changed = sum(1 for before, after in zip(blocks, merged) if before != after)
    logger.info("Merged word cues in %d of %d blocks", changed, len(blocks))
    return join_sections(merged, trailer)


class MergeTransform(BaseTransform):
    """Transform that writes ``{stem}-karaoke.vtt`` with marker-timed cues."""

    def __init__(self, gap_time: float | None = None) -> None:
        self._gap_time = gap_time

    @property
    def name(self) -> str:
        return "Karaoke merge"

    def apply(self, document: str) -> TransformOutput:
        return TransformOutput(
            suffix="-karaoke.vtt",
            content=merge_document(document, gap_time=self._gap_time),
        )
