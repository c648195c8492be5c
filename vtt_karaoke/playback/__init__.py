"""Runtime karaoke highlighting for active cues.

WHY: Merged karaoke cues carry their word timings as timestamp markers.
At playback time something has to turn those markers into visible
past/current/future styling while the media plays, seeks and rewinds.

HOW: markup.py parses a cue payload into segments and marker times
(a Code) and renders it with class spans. tracker.py keeps one Code per
active cue and re-renders cue text as the host reports position and
active-cue changes. host.py defines what the tracker needs from a
player and provides a simulated player for previews and tests.

RULES:
- The tracker owns no threads and never blocks; the host drives it
- Cue text is the only thing the tracker writes back to the host
"""
