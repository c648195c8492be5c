"""Karaoke WebVTT toolkit: word-synchronized subtitle cues.

WHY: Sing-along subtitles need each word highlighted as it is sung.
WebVTT can carry per-word timing inside a cue as ``<time>`` markers,
but authoring those timings by hand is tedious and players do not
style them on their own.

HOW: Two offline tools and one runtime component:
  split: expand each cue into word cues timed by word length
  merge: reassemble refined word cues into cues with markers
  SegmentTracker: at playback time, rewrite active cue text so the
    segment being sung is ``current``

RULES:
- Non-cue blocks (header, STYLE, NOTE, malformed) pass through unchanged
- Parsing is permissive; only unreadable header times demote a cue to text
- The tracker touches only cues that contain at least one marker
"""

from vtt_karaoke.playback.markup import Code, parse_payload
from vtt_karaoke.playback.tracker import SegmentTracker
from vtt_karaoke.transforms.merge import merge_document
from vtt_karaoke.transforms.split import split_document

__version__ = "0.1.0"

__all__ = [
    "Code",
    "SegmentTracker",
    "merge_document",
    "parse_payload",
    "split_document",
]
