"""Document transform registry.

WHY: The CLI looks transforms up by command name. A central dict makes
adding a transform one import and one line.

HOW: TRANSFORMS maps command names to transform *classes* (not
instances). Callers instantiate as needed: ``TRANSFORMS["split"]()``.

RULES:
- Keys are the CLI subcommand names
- Values are BaseTransform subclasses (not instances)
- Every transform listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vtt_karaoke.transforms.merge import MergeTransform
from vtt_karaoke.transforms.split import SplitTransform

if TYPE_CHECKING:
    from vtt_karaoke.transforms.base import BaseTransform

TRANSFORMS: dict[str, type[BaseTransform]] = {
    "split": SplitTransform,
    "merge": MergeTransform,
}
