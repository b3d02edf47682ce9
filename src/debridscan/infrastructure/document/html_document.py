"""BeautifulSoup-backed document with a node-insertion watch.

Stands in for a live DOM: anchors resolve against ``base_url`` the way a
browser resolves ``anchor.href``, the text walk skips non-visible
subtrees, and :meth:`HtmlDocument.append_html` plays the role of a
mutation that inserts nodes and notifies watchers.
"""

from __future__ import annotations

from typing import Iterator
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag

from debridscan.domain.ports.document import NodesAddedListener, WatchHandle
from debridscan.infrastructure.common.subscriptions import ListenerRegistry

_HIDDEN_TAGS = ["script", "style", "noscript"]


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (lxml parser)."""
    return BeautifulSoup(html, "lxml")


class HtmlDocument:
    """One parsed page.  Implements ``DocumentPort``."""

    def __init__(self, html: str, *, base_url: str = "") -> None:
        self._soup = parse_html(html)
        self._base_url = base_url
        self._watchers: ListenerRegistry[int] = ListenerRegistry("document")

    @property
    def watcher_count(self) -> int:
        return len(self._watchers)

    def _root(self) -> Tag:
        return self._soup.body or self._soup

    def anchor_targets(self) -> list[str]:
        targets: list[str] = []
        for tag in self._soup.select("a[href]"):
            href = str(tag.get("href") or "").strip()
            if href and self._base_url:
                href = urljoin(self._base_url, href)
            targets.append(href)
        return targets

    def text_nodes(self) -> Iterator[str]:
        for node in self._root().find_all(string=True):
            # Comments, CDATA, doctype and script/style strings are subclasses.
            if type(node) is not NavigableString:
                continue
            if node.find_parent(_HIDDEN_TAGS) is not None:
                continue
            if node:
                yield str(node)

    def watch(self, listener: NodesAddedListener) -> WatchHandle:
        return self._watchers.add(listener)

    def append_html(self, fragment: str, parent: Tag | None = None) -> int:
        """Insert the nodes of *fragment* under *parent* (default: body).

        Returns the number of top-level nodes inserted.  Watchers are
        notified only when at least one node was added.
        """
        parsed = parse_html(fragment)
        source = parsed.body or parsed
        nodes = list(source.contents)
        target = parent if parent is not None else self._root()
        for node in nodes:
            target.append(node.extract())
        if nodes:
            self._watchers.notify(len(nodes))
        return len(nodes)
