"""Shared test fixtures for the vtt_karaoke test suite.

WHY: The block parser, both transforms, the tracker and the CLI all
work on the same kinds of documents. Centralizing the sample documents
here keeps every test module on the same verified inputs.

HOW: Module-level constants hold the raw documents; pytest fixtures
hand out copies and build a SimulatedPlayer with an attached
SegmentTracker for runtime tests.

RULES:
- Sample documents use "\\n" line endings unless a test says otherwise
- KARAOKE_VTT matches the worked examples: a "<1.0>hello<2.0>world"
  cue on [0, 3] and a merged cue with a recorded pause
- Tracker fixtures use the default class names (past/current/future)
"""

from typing import Tuple

import pytest

from vtt_karaoke.config import ClassNames
from vtt_karaoke.playback.host import SimulatedPlayer, TextTrack, TrackCue
from vtt_karaoke.playback.tracker import SegmentTracker


PLAIN_VTT = (
    "WEBVTT\n"
    "\n"
    "STYLE\n"
    "::cue(.current) { color: yellow; }\n"
    "\n"
    "NOTE made by hand\n"
    "\n"
    "intro\n"
    "00:00:00.000 --> 00:00:03.000 align:start\n"
    "hi there\n"
    "\n"
    "00:00:04.000 --> 00:00:06.000\n"
    "amazing grace\n"
    "how sweet\n"
)

WORDS_VTT = (
    "WEBVTT\n"
    "\n"
    "00:00:00.000 --> 00:00:00.500\n"
    "a\n"
    "00:00:02.000 --> 00:00:02.400\n"
    "b\n"
    "\n"
    "00:00:03.000 --> 00:00:03.500\n"
    "c\n"
    "00:00:03.500 --> 00:00:04.000\n"
    "d\n"
)

KARAOKE_VTT = (
    "WEBVTT\n"
    "\n"
    "00:00:00.000 --> 00:00:03.000\n"
    "<00:00:01.000>hello<00:00:02.000>world\n"
    "\n"
    "00:00:04.000 --> 00:00:08.000\n"
    "one <00:00:05.000><00:00:06.500>two\n"
)


@pytest.fixture
def plain_vtt():
    return PLAIN_VTT


@pytest.fixture
def words_vtt():
    return WORDS_VTT


@pytest.fixture
def karaoke_vtt():
    return KARAOKE_VTT


@pytest.fixture
def default_classes():
    return ClassNames()


@pytest.fixture
def karaoke_player() -> Tuple[SimulatedPlayer, TextTrack, SegmentTracker]:
    """A player at position 0 with KARAOKE_VTT loaded and a tracker attached."""
    player = SimulatedPlayer(duration=10.0)
    tracker = SegmentTracker(player, classes=ClassNames())
    tracker.attach()
    track = TextTrack.from_document(KARAOKE_VTT, label="one")
    player.add_track(track)
    return player, track, tracker


@pytest.fixture
def make_cue():
    """Factory for a host cue: make_cue(start, end, text)."""
    def _make(start, end, text):
        return TrackCue(start=start, end=end, text=text)
    return _make
