"""Configuration defaults, typed options, and .env loading.

WHY: The merge gap threshold and the three karaoke class names are the
only knobs of the toolkit. Keeping them in one module, overridable from
the environment, lets a deployment restyle its captions (or tune pause
detection) without touching code or passing flags everywhere.

HOW: python-dotenv loads the .env file on import. Raw defaults are
module-level constants read with os.getenv. The pydantic models
ClassNames and MergeOptions validate values before they reach the
tracker or the merger; load_class_names() and load_merge_options()
build them from the environment.

RULES:
- Class names must be usable inside a WebVTT class span (``<c.name>``):
  letters, digits, hyphen and underscore only
- gap_time is in float seconds and must be >= 0
- Invalid environment values raise ValueError (pydantic ValidationError)
  when the loader is called, not at import time
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env from the working directory (where the tool is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Raw defaults
# ---------------------------------------------------------------------------

DEFAULT_GAP_TIME = os.getenv("VTT_KARAOKE_GAP_TIME", "1.0")
"""Seconds of silence between two words that the merger records as a pause."""

DEFAULT_PAST_CLASS = os.getenv("VTT_KARAOKE_PAST_CLASS", "past")
DEFAULT_CURRENT_CLASS = os.getenv("VTT_KARAOKE_CURRENT_CLASS", "current")
DEFAULT_FUTURE_CLASS = os.getenv("VTT_KARAOKE_FUTURE_CLASS", "future")

CLASS_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"

# ---------------------------------------------------------------------------
# Typed options
# ---------------------------------------------------------------------------


class ClassNames(BaseModel):
    """Class labels wrapped around past, current and future text runs.

    WHY: Stylesheets differ between players and sites; any of the three
    classes can be renamed to match an existing ``::cue()`` stylesheet.

    RULES:
    - Every name matches CLASS_NAME_PATTERN
    - The model is frozen so a tracker can share one instance safely
    """

    model_config = {"frozen": True}

    past: str = Field(default="past", pattern=CLASS_NAME_PATTERN,
                      description="Class for segments already sung.")
    current: str = Field(default="current", pattern=CLASS_NAME_PATTERN,
                         description="Class for the segment being sung.")
    future: str = Field(default="future", pattern=CLASS_NAME_PATTERN,
                        description="Class for segments not yet reached.")


class MergeOptions(BaseModel):
    """Options for reassembling word cues into karaoke cues."""

    model_config = {"frozen": True}

    gap_time: float = Field(default=1.0, ge=0.0,
                            description="Pause length (seconds) that earns an extra marker.")


def load_class_names() -> ClassNames:
    """Build ClassNames from VTT_KARAOKE_*_CLASS environment values."""
    return ClassNames(
        past=DEFAULT_PAST_CLASS,
        current=DEFAULT_CURRENT_CLASS,
        future=DEFAULT_FUTURE_CLASS,
    )


def load_merge_options(gap_time: float | None = None) -> MergeOptions:
    """Build MergeOptions, preferring an explicit gap_time over the environment.

    RULES:
    - gap_time=None falls back to VTT_KARAOKE_GAP_TIME
    - A non-numeric environment value raises ValueError
    """
    if gap_time is None:
        try:
            gap_time = float(DEFAULT_GAP_TIME)
        except ValueError as e:
            raise ValueError(
                "VTT_KARAOKE_GAP_TIME must be a number of seconds, got {!r}".format(
                    DEFAULT_GAP_TIME
                )
            ) from e
    return MergeOptions(gap_time=gap_time)
