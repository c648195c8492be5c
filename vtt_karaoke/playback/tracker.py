"""Segment tracker: past/current/future classification during playback.

WHY: A karaoke cue is shown for its whole duration, but the segment
being sung should stand out from what was already sung and what is
still to come. Players know nothing about timestamp markers, so the
tracker rewrites each active cue's text as the position moves, wrapping
text runs in past/current/future class spans.

HOW: Each cue is parsed once, the first time it becomes active, and its
Code is kept in a side table keyed by the cue object. refresh() walks
the Code from the start, re-renders the text and records the interval
[lower, upper) during which the new current segment stays current.
Per track, the tracker keeps the intersection of those intervals over
all active karaoke cues; a position update inside it does nothing.
Leaving it forward refreshes the cues whose own interval has ended;
leaving it backward refreshes the cues whose interval has not started.

RULES:
- Cues without markers are never touched (their Code is None)
- Cues are refreshed from the same position within one notification,
  so concurrent cues on a track stay in step
- The track interval is recomputed after every refresh
- Position checks for a track are suspended while its interval reaches
  past the media duration and starts at zero (nothing can change), and
  re-evaluated at the next active-cue-set change
- Side tables hold weak references; dropping a cue drops its state
"""

from __future__ import annotations

import logging
import math
import weakref
from dataclasses import dataclass
from typing import Any, Optional

from vtt_karaoke.config import ClassNames, load_class_names
from vtt_karaoke.playback.host import MediaHost, TextTrack
from vtt_karaoke.playback.markup import Code, parse_payload, render_code

logger = logging.getLogger(__name__)


@dataclass
class CueState:
    """Tracker-owned state for one cue.

    RULES:
    - code is None for cues without markers (the "no markers" sentinel)
    - current, lower, upper describe the segment rendered as current
    """

    code: Optional[Code]
    current: int = 0
    lower: float = 0.0
    upper: float = math.inf


@dataclass
class TrackState:
    """Shared interval [lower, upper) over a track's active karaoke cues."""

    lower: float = 0.0
    upper: float = math.inf
    checking: bool = False


class SegmentTracker:
    """Keeps the text of active karaoke cues in step with playback.

    Usage::

        tracker = SegmentTracker(player)
        tracker.attach()
        player.seek(12.5)   # cue texts are now rewritten

    Args:
        host: The media player owning tracks and cues.
        classes: Class names for past/current/future text; defaults to
            the VTT_KARAOKE_*_CLASS environment configuration.
    """

    def __init__(self, host: MediaHost, classes: Optional[ClassNames] = None) -> None:
        self._host = host
        self._classes = classes if classes is not None else load_class_names()
        self._cues: weakref.WeakKeyDictionary[Any, CueState] = weakref.WeakKeyDictionary()
        self._tracks: weakref.WeakKeyDictionary[TextTrack, TrackState] = weakref.WeakKeyDictionary()

    @property
    def classes(self) -> ClassNames:
        return self._classes

    # -- Wiring --------------------------------------------------------------

    def attach(self) -> None:
        """Start listening to the host and take over its existing tracks."""
        self._host.add_listener("track_added", self.on_track_added)
        self._host.add_listener("cue_set_changed", self.on_active_cue_set_change)
        self._host.add_listener("position_changed", self.on_position_changed)
        for track in self._host.text_tracks():
            self.on_track_added(track)
            self.on_active_cue_set_change(track)

    def detach(self) -> None:
        self._host.remove_listener("track_added", self.on_track_added)
        self._host.remove_listener("cue_set_changed", self.on_active_cue_set_change)
        self._host.remove_listener("position_changed", self.on_position_changed)

    # -- State lookup ----------------------------------------------------------

    def cue_state(self, cue: Any) -> CueState | None:
        """The tracker's state for ``cue``, or None if it was never active."""
        return self._cues.get(cue)

    def track_state(self, track: TextTrack) -> TrackState | None:
        return self._tracks.get(track)

    # -- Per-cue operations ----------------------------------------------------

    def classify(self, cue: Any, now: float) -> CueState:
        """Parse ``cue`` on first sight and render its initial classification.

        A cue seen before keeps its cached state; the payload is parsed
        only once per cue.
        """
        state = self._cues.get(cue)
        if state is not None:
            return state
        state = CueState(code=parse_payload(cue.text, cue.start))
        self._cues[cue] = state
        if state.code is not None:
            self.refresh(cue, now)
        return state

    def refresh(self, cue: Any, now: float) -> None:
        """Re-render ``cue`` so the segment containing ``now`` is current.

        Classification is computed from scratch, so repeated calls converge
        on the classification for the last ``now`` whatever came before.
        """
        state = self._cues.get(cue)
        if state is None:
            self.classify(cue, now)
            return
        code = state.code
        if code is None:
            return
        index = code.current_index(now)
        state.current = index
        state.lower, state.upper = code.bounds(index)
        cue.text = render_code(code, index, self._classes)
        logger.debug(
            "Refreshed cue at %.3f: segment %d of %d current at %.3f",
            cue.start, index, len(code.segments), now,
        )

    # -- Host notifications ----------------------------------------------------

    def on_track_added(self, track: TextTrack) -> None:
        if track not in self._tracks:
            self._tracks[track] = TrackState()

    def on_active_cue_set_change(self, track: TextTrack) -> None:
        """Classify newly active cues and rebuild the track interval.

        A cue that was classified earlier and comes back (e.g. after a
        seek) is refreshed if its stored interval no longer holds ``now``.
        """
        self.on_track_added(track)
        now = self._host.current_position()
        for cue in self._host.active_cues(track):
            state = self._cues.get(cue)
            if state is None:
                self.classify(cue, now)
            elif state.code is not None and not state.lower <= now < state.upper:
                self.refresh(cue, now)
        self._recompute_interval(track)
        self._update_checking(track)

    def on_position_changed(self) -> None:
        now = self._host.current_position()
        for track in self._host.text_tracks():
            state = self._tracks.get(track)
            if state is None or not state.checking:
                continue
            if now >= state.upper:
                self.on_playback_advance(track, now)
            elif now < state.lower:
                self.on_playback_rewind(track, now)

    def on_playback_advance(self, track: TextTrack, now: float) -> None:
        """Refresh cues whose current segment ended at or before ``now``."""
        state = self._tracks.get(track)
        if state is None or now < state.upper:
            return
        for cue in self._host.active_cues(track):
            cue_state = self._cues.get(cue)
            if cue_state is None:
                self.classify(cue, now)
            elif cue_state.code is not None and cue_state.upper <= now:
                self.refresh(cue, now)
        self._recompute_interval(track)

    def on_playback_rewind(self, track: TextTrack, now: float) -> None:
        """Refresh cues whose current segment starts after ``now``."""
        state = self._tracks.get(track)
        if state is None or now >= state.lower:
            return
        for cue in self._host.active_cues(track):
            cue_state = self._cues.get(cue)
            if cue_state is None:
                self.classify(cue, now)
            elif cue_state.code is not None and cue_state.lower > now:
                self.refresh(cue, now)
        self._recompute_interval(track)

    # -- Track interval ----------------------------------------------------------

    def _recompute_interval(self, track: TextTrack) -> None:
        state = self._tracks[track]
        lower, upper = 0.0, math.inf
        for cue in self._host.active_cues(track):
            cue_state = self._cues.get(cue)
            if cue_state is None or cue_state.code is None:
                continue
            lower = max(lower, cue_state.lower)
            upper = min(upper, cue_state.upper)
        state.lower, state.upper = lower, upper

    def _update_checking(self, track: TextTrack) -> None:
        state = self._tracks[track]
        duration = self._host.duration
        limit = duration if duration is not None else math.inf
        checking = not (state.upper > limit and state.lower <= 0.0)
        if checking != state.checking:
            logger.debug(
                "%s position checks for track '%s' (interval %.3f-%.3f)",
                "Resuming" if checking else "Suspending", track.label,
                state.lower, state.upper,
            )
        state.checking = checking
