"""Time codes, the document IR and the block parser.

WHY: Both offline tools and the playback tracker read the same time
grammar, and both tools read documents the same way. The core package
holds those shared pieces so the tools never re-implement parsing.

HOW: timecode.py defines the lax time grammar and FormatError, ir.py
defines the Cue/OpaqueSection/Document dataclasses, blocks.py splits a
document into sections and recognizes cues.

RULES:
- Parsing is permissive: anything that is not a cue is opaque text
- FormatError is the only exception raised by the parsing layer and it
  never escapes parse_document()
"""
