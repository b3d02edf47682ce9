"""Port for the rendered document being scanned."""

from __future__ import annotations

from typing import Callable, Iterator, Protocol, runtime_checkable

# Called with the number of nodes inserted by one mutation.
NodesAddedListener = Callable[[int], None]


@runtime_checkable
class WatchHandle(Protocol):
    """Subscription handle; ``release()`` unsubscribes and is idempotent."""

    def release(self) -> None: ...

    @property
    def active(self) -> bool: ...


@runtime_checkable
class DocumentPort(Protocol):
    """Read access to one document plus a node-insertion watch."""

    def anchor_targets(self) -> list[str]:
        """Resolved targets of every anchor element, in document order."""
        ...

    def text_nodes(self) -> Iterator[str]:
        """Visible text nodes (script/style/noscript subtrees excluded)."""
        ...

    def watch(self, listener: NodesAddedListener) -> WatchHandle:
        """Subscribe to node insertions anywhere in the subtree."""
        ...
