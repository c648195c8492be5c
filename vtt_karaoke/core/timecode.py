"""Lax time-code grammar shared by the block parser, the tools and the tag parser.

WHY: Cue header times and timestamp markers use the same numeric
grammar, and every component needs to read it the same way. Authors
hand-edit these files, so the reader is deliberately forgiving: it
accepts one to three colon-delimited groups and performs no range
checks ("75.000" seconds is read literally).

HOW: A single regular expression body describes ``[H+:][M+:]S[.fff]``.
TIME_RE anchors it for header times; MARKER_RE wraps it in angle
brackets for payload markers. Groups are read right to left: the last
group is seconds, a second-to-last group is minutes, a third is hours.

RULES:
- parse_time raises FormatError when the text does not match at all
- parse_marker never raises; it returns None for non-markers
- The seconds group needs at least one digit ("<>" is not a marker)
- format_time always emits HH:MM:SS.mmm, hours zero-padded to at least
  two digits, rounded half up to the nearest millisecond
"""

from __future__ import annotations

import math
import re

_TIME_BODY = r"(?:(\d+):)?(?:(\d+):)?(\d+(?:\.\d*)?|\.\d+)"

TIME_RE = re.compile(r"^" + _TIME_BODY + r"$")
MARKER_RE = re.compile(r"^<" + _TIME_BODY + r">$")


class FormatError(ValueError):
    """Raised when a time value does not match the time-code grammar."""


def _to_seconds(first: str | None, second: str | None, seconds: str) -> float:
    value = float(seconds)
    if second is not None:
        # HH:MM:SS
        value += (int(first) * 60 + int(second)) * 60
    elif first is not None:
        # MM:SS
        value += int(first) * 60
    return value


def parse_time(text: str) -> float:
    """Parse a lax time code into float seconds.

    Missing leading groups default to zero, so ``"1:02.5"`` is 62.5 and
    ``"3"`` is 3.0.

    Raises:
        FormatError: If ``text`` is not one to three numeric groups.
    """
    match = TIME_RE.match(text)
    if match is None:
        raise FormatError("Not a time value: {!r}".format(text))
    return _to_seconds(*match.groups())


def parse_marker(tag: str) -> float | None:
    """Return the time of a ``<...>`` timestamp marker, or None for other markup."""
    match = MARKER_RE.match(tag)
    if match is None:
        return None
    return _to_seconds(*match.groups())


def format_time(seconds: float) -> str:
    """Format float seconds as ``HH:MM:SS.mmm``.

    Rounding happens here and only here; callers keep full precision
    in arithmetic so that rounding never accumulates.

    Raises:
        FormatError: If ``seconds`` is negative.
    """
    if seconds < 0:
        raise FormatError("Negative time value: {!r}".format(seconds))
    # Half-up: an exact half millisecond goes to the later millisecond.
    total_ms = int(math.floor(seconds * 1000 + 0.5))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(hours, minutes, secs, millis)
