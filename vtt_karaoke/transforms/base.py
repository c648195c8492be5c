"""Abstract base transform and output container.

WHY: The split and merge tools read the same kind of document and
write the same kind of document, and the CLI drives them the same way
(read, transform, save next to the input). A shared base lets the CLI
treat them generically through the TRANSFORMS registry.

HOW: BaseTransform is an ABC with a ``name`` property and an
``apply()`` method. TransformOutput bundles the produced document text
with the file suffix used to name it when no output path is given.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``apply()``
- ``apply()`` is a pure text-to-text function; file I/O belongs to the caller
- ``suffix`` starts with a hyphen, e.g. ``"-words.vtt"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class TransformOutput:
    """One document produced by a transform.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-words.vtt"`` → ``"song-words.vtt"``.
        content: The complete output document.
    """

    suffix: str
    content: str


class BaseTransform(ABC):
    """Abstract base for document transforms.

    To add a new transform:
    1. Create a new file in transforms/
    2. Subclass BaseTransform
    3. Implement apply() and name
    4. Register in TRANSFORMS dict in transforms/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable transform name, e.g. 'Word split'."""

    @abstractmethod
    def apply(self, document: str) -> TransformOutput:
        """Transform a whole document.

        Args:
            document: The complete input document text.

        Returns:
            A TransformOutput holding the rewritten document.
        """
