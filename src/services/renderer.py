"""Text rendering of ready test results."""

from abc import ABC, abstractmethod
from types import MappingProxyType

from src.models.ready_item import ReadyItem


# Output value a node reports when its command timed out
TIMEOUT_SENTINEL = "-2"

TIMEOUT_MESSAGE = (
    "The command timed-out. It either took too long to execute "
    "or we could not connect to your target at all."
)


class Renderer(ABC):
    """Turns one ready item into display text."""

    @abstractmethod
    def render_body(self, ready: ReadyItem) -> str:
        """Build the body text for a ready item."""

    def render_header(self, ready: ReadyItem) -> str:
        """Build the node header line.

        Args:
            ready: Ready item.

        Returns:
            str: e.g. "Node12, AS13335, Frankfurt, Germany".
        """
        node = ready.item.result.node
        return f"Node{node.id}, AS{node.as_number}, {node.city}, {node.country_name}"

    def render(self, ready: ReadyItem) -> str:
        """Build the full text block for a ready item.

        Args:
            ready: Ready item.

        Returns:
            str: Header line and body, newline-terminated.
        """
        return f"{self.render_header(ready)}\n{self.render_body(ready)}\n"


class DNSResolveRenderer(Renderer):
    """Renderer for DNS resolve results."""

    substitutions = MappingProxyType({TIMEOUT_SENTINEL: TIMEOUT_MESSAGE})

    def render_body(self, ready: ReadyItem) -> str:
        result = ready.item.result
        if not ready.is_output():
            return result.message

        body = "\n".join(result.output)
        return self.substitutions.get(body, body)
