"""Host media player contract and an in-memory simulated player.

WHY: The segment tracker never plays media itself. It needs a host that
owns text tracks and cues, knows the playback position and duration,
and tells it when tracks appear, when the set of active cues changes
and when the position moves. Defining that contract as an ABC keeps
the tracker independent of any real player, and the simulated player
lets the CLI preview and the tests drive the tracker deterministically.

HOW: MediaHost is the ABC the tracker talks to. TextTrack and TrackCue
are the host-owned objects; the tracker keys its side tables on their
identity (eq=False keeps them hashable by identity and weak-referenceable).
SimulatedPlayer computes active cues from a position and dispatches
the three notifications synchronously, in a fixed order: track_added
when a track is added, then on every seek cue_set_changed for each
track whose active set changed, then position_changed.

RULES:
- A cue is active while start <= position < end
- active_cues() returns cues in track order
- Listeners run to completion before the next notification is sent
- Event names: "track_added", "cue_set_changed", "position_changed"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vtt_karaoke.core.blocks import parse_document

EVENTS = ("track_added", "cue_set_changed", "position_changed")


@dataclass(eq=False)
class TrackCue:
    """A cue as owned by the host player; ``text`` is rewritten by the tracker."""

    start: float
    end: float
    text: str


@dataclass(eq=False)
class TextTrack:
    """A named collection of cues shown together (one language or one part)."""

    label: str
    cues: List[TrackCue] = field(default_factory=list)

    @classmethod
    def from_document(cls, document: str, label: str) -> TextTrack:
        """Build a track from the cues of a timed-text document."""
        cues = [
            TrackCue(start=cue.start, end=cue.end, text=cue.text)
            for cue in parse_document(document).cues
        ]
        return cls(label=label, cues=cues)


class MediaHost(ABC):
    """What the segment tracker needs from a media player."""

    @abstractmethod
    def text_tracks(self) -> list[TextTrack]:
        """All text tracks currently known to the player."""

    @abstractmethod
    def active_cues(self, track: TextTrack) -> list[TrackCue]:
        """Cues of ``track`` whose interval contains the current position."""

    @abstractmethod
    def current_position(self) -> float:
        """Playback position in seconds."""

    @property
    @abstractmethod
    def duration(self) -> float | None:
        """Total media duration in seconds, or None while unknown."""

    @abstractmethod
    def add_listener(self, event: str, callback: Callable[..., Any]) -> None:
        """Register ``callback`` for one of EVENTS."""

    @abstractmethod
    def remove_listener(self, event: str, callback: Callable[..., Any]) -> None:
        """Unregister a callback; unknown callbacks are ignored."""


class SimulatedPlayer(MediaHost):
    """An in-memory player that moves only when told to.

    WHY: Previewing karaoke output and testing the tracker both need a
    host whose position changes are explicit and repeatable.

    HOW: seek() sets the position, recomputes each track's active set,
    fires cue_set_changed for every track whose set differs from the
    previous one, then fires position_changed once.

    RULES:
    - Positions may move backward (seeking) as well as forward
    - Notifications are delivered synchronously, in registration order
    """

    def __init__(self, duration: Optional[float] = None) -> None:
        self._tracks: List[TextTrack] = []
        self._active: Dict[int, List[TrackCue]] = {}
        self._position = 0.0
        self._duration = duration
        self._listeners: Dict[str, List[Callable[..., Any]]] = {e: [] for e in EVENTS}

    # -- MediaHost ---------------------------------------------------------

    def text_tracks(self) -> list[TextTrack]:
        return list(self._tracks)

    def active_cues(self, track: TextTrack) -> list[TrackCue]:
        return list(self._active.get(id(track), []))

    def current_position(self) -> float:
        return self._position

    @property
    def duration(self) -> float | None:
        return self._duration

    def add_listener(self, event: str, callback: Callable[..., Any]) -> None:
        if event not in self._listeners:
            raise ValueError(
                "Unknown event '{}'. Available: {}".format(event, ", ".join(EVENTS))
            )
        self._listeners[event].append(callback)

    def remove_listener(self, event: str, callback: Callable[..., Any]) -> None:
        callbacks = self._listeners.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    # -- Player controls ---------------------------------------------------

    def add_track(self, track: TextTrack) -> None:
        """Add a track, notify listeners, and compute its active cues."""
        self._tracks.append(track)
        self._active[id(track)] = []
        self._emit("track_added", track)
        self._update_active(track)

    def seek(self, position: float) -> None:
        """Move to ``position`` and deliver the resulting notifications."""
        self._position = position
        for track in self._tracks:
            self._update_active(track)
        self._emit("position_changed")

    def _update_active(self, track: TextTrack) -> None:
        now = self._position
        active = [cue for cue in track.cues if cue.start <= now < cue.end]
        previous = self._active.get(id(track), [])
        if [id(c) for c in active] != [id(c) for c in previous]:
            self._active[id(track)] = active
            self._emit("cue_set_changed", track)

    def _emit(self, event: str, *args: Any) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)
