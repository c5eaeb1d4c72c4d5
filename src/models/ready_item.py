"""Ready-to-render result models."""

from dataclasses import dataclass
from enum import Enum

from src.models.dns_test import ResultItem


class ReadyKind(Enum):
    """Why an item is ready to be shown."""

    OUTPUT = "OUTPUT"  # Node produced genuine output (empty message)
    STATUS = "STATUS"  # Node reported a final status message instead


@dataclass(frozen=True)
class ReadyItem:
    """A snapshot item whose content is final and must be shown exactly once.

    Attributes:
        kind: Readiness classification.
        item: The snapshot item.
    """

    kind: ReadyKind
    item: ResultItem

    def is_output(self) -> bool:
        """Check if item carries genuine node output.

        Returns:
            bool: True if kind is OUTPUT, False otherwise.
        """
        return self.kind == ReadyKind.OUTPUT
