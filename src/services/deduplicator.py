"""Result deduplication for cumulative test snapshots.

Every fetch returns all results seen so far, so the same item shows up in
many snapshots. The deduplicator remembers which item IDs were already
shown and picks out the items that became ready since the last poll.
"""

import logging
from typing import Set

from src.models.dns_test import ResultItem, Snapshot
from src.models.ready_item import ReadyItem, ReadyKind


logger = logging.getLogger(__name__)


class ResultDeduplicator:
    """Tracks rendered item IDs across the snapshots of one run.

    Readiness policy, per item in snapshot order:
        - empty message: ready as OUTPUT
        - "NO DATA": still running, left for a later poll
        - any other message: ready as STATUS

    Attributes:
        _rendered_ids: IDs already emitted during this run.

    Example:
        >>> dedup = ResultDeduplicator()
        >>> ready = dedup.collect_ready(snapshot)
        >>> dedup.collect_ready(snapshot)  # same snapshot again
        []
    """

    def __init__(self) -> None:
        self._rendered_ids: Set[str] = set()

    @property
    def rendered_count(self) -> int:
        """Number of items emitted so far."""
        return len(self._rendered_ids)

    def is_rendered(self, item_id: str) -> bool:
        """Check if an item ID was already emitted.

        Args:
            item_id: Snapshot item ID.

        Returns:
            bool: True if emitted earlier in this run.
        """
        return item_id in self._rendered_ids

    def mark_rendered(self, item_id: str) -> None:
        """Record an item ID as emitted.

        Args:
            item_id: Snapshot item ID.
        """
        self._rendered_ids.add(item_id)

    @staticmethod
    def is_ready(item: ResultItem) -> bool:
        """Check if an item's content is final.

        Args:
            item: Snapshot item.

        Returns:
            bool: False only while the node reports NO DATA.
        """
        return not item.result.is_pending()

    def collect_ready(self, snapshot: Snapshot) -> list[ReadyItem]:
        """Select items that became ready since the previous call and mark them.

        Args:
            snapshot: Cumulative snapshot from the latest fetch.

        Returns:
            list[ReadyItem]: Newly ready items in snapshot order.
        """
        ready: list[ReadyItem] = []

        for item in snapshot.items:
            if self.is_rendered(item.id):
                continue

            if not self.is_ready(item):
                logger.debug(f"Item {item.id} on node {item.result.node.id} still pending")
                continue

            kind = ReadyKind.OUTPUT if item.result.has_output() else ReadyKind.STATUS
            self.mark_rendered(item.id)
            ready.append(ReadyItem(kind=kind, item=item))

        return ready
