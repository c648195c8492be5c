"""Tag parser: cue payload text → segments separated by marker times.

WHY: A karaoke cue payload mixes ordinary markup (``<i>``, ``<c.red>``,
``<v Singer>``) with timestamp markers. To highlight one segment at a
time the tracker must rewrite only the text, leaving every ordinary
tag exactly where the author put it, and split the payload at the
markers.

HOW: The payload is scanned left to right as text runs and ``<...>``
tags (an unterminated tag at the end counts as a whole tag). Marker
tags close the current segment and record their time. Ordinary tags
are appended to the trailing tag run of the current segment. The
result is a Code: k+1 segments and k marker times.

A Segment is a tuple of runs that always starts and ends with a TagRun
and alternates TagRun/TextRun in between:
``(TagRun, TextRun, TagRun, ..., TextRun, TagRun)``. Tag runs are often
empty; ``(TagRun(""),)`` is an empty segment (e.g. a recorded pause).

RULES:
- Parsing never fails; anything that is not a marker is markup
- No marker → parse_payload returns None and the cue text is left alone
- Marker times are not sorted or checked against the cue's start/end
- Rendering wraps only TextRuns in ``<c.class>...</c>``; TagRuns are
  reproduced verbatim in their original positions
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Tuple, Union

from vtt_karaoke.config import ClassNames
from vtt_karaoke.core.timecode import parse_marker

TOKEN_RE = re.compile(r"<[^>]*>?|[^<]+", re.S)


@dataclass(frozen=True)
class TagRun:
    """Concatenated non-marker markup between two text runs (may be empty)."""

    markup: str


@dataclass(frozen=True)
class TextRun:
    """A plain-text run (never empty)."""

    text: str


Run = Union[TagRun, TextRun]
Segment = Tuple[Run, ...]

EMPTY_SEGMENT: Segment = (TagRun(""),)


class _SegmentBuilder:
    def __init__(self) -> None:
        self._runs: list[Run] = [TagRun("")]

    def add_text(self, text: str) -> None:
        self._runs.append(TextRun(text))
        self._runs.append(TagRun(""))

    def add_markup(self, tag: str) -> None:
        # The builder always ends on a TagRun, so markup merges into it.
        last = self._runs[-1]
        self._runs[-1] = TagRun(last.markup + tag)

    def build(self) -> Segment:
        return tuple(self._runs)


@dataclass(frozen=True)
class Code:
    """Segments of one cue and the marker times between them.

    Segment 0 spans [start, times[0]), segment i spans [times[i-1], times[i]),
    the last segment starts at times[-1] and lasts until the cue leaves the
    active set (the host ends it, not the Code).

    RULES:
    - len(segments) == len(times) + 1 and len(times) >= 1
    """

    start: float
    segments: Tuple[Segment, ...]
    times: Tuple[float, ...]

    def current_index(self, now: float) -> int:
        """Index of the segment that is current at ``now``.

        Walks from the first marker: every segment whose closing marker
        is at or before ``now`` is past, the next one is current.
        """
        index = 0
        while index < len(self.times) and self.times[index] <= now:
            index += 1
        return index

    def bounds(self, index: int) -> tuple[float, float]:
        """Interval [lower, upper) during which segment ``index`` stays current.

        The last segment never expires on its own (upper bound +inf); the
        host removes the cue from the active set when it ends.
        """
        lower = self.times[index - 1] if index > 0 else self.start
        upper = self.times[index] if index < len(self.times) else math.inf
        return lower, upper


def parse_payload(text: str, start: float) -> Code | None:
    """Parse a cue payload into a Code, or None if it has no markers.

    Args:
        text: The raw cue text.
        start: Cue start time (lower bound of segment 0).
    """
    segments: list[Segment] = []
    times: list[float] = []
    builder = _SegmentBuilder()

    for token in TOKEN_RE.findall(text):
        if not token.startswith("<"):
            builder.add_text(token)
            continue
        marker = parse_marker(token)
        if marker is None:
            builder.add_markup(token)
            continue
        segments.append(builder.build())
        times.append(marker)
        builder = _SegmentBuilder()

    if not times:
        return None
    segments.append(builder.build())
    return Code(start=start, segments=tuple(segments), times=tuple(times))


def render_segment(segment: Segment, css_class: str) -> str:
    parts = []
    for run in segment:
        if isinstance(run, TagRun):
            parts.append(run.markup)
        else:
            parts.append("<c.{}>{}</c>".format(css_class, run.text))
    return "".join(parts)


def render_code(code: Code, current: int, classes: ClassNames) -> str:
    """Rebuild cue text with segments before ``current`` past and after it future."""
    parts = []
    for index, segment in enumerate(code.segments):
        if index < current:
            css_class = classes.past
        elif index == current:
            css_class = classes.current
        else:
            css_class = classes.future
        parts.append(render_segment(segment, css_class))
    return "".join(parts)
