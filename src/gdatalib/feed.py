"""Atom feed parsing: typed entries plus feed-level and OpenSearch metadata."""

from __future__ import annotations

import asyncio
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

import structlog

from gdatalib import namespaces as ns
from gdatalib.atom import Author, Category, Generator, Link
from gdatalib.entry import Entry
from gdatalib.errors import DuplicateElementError, RequiredElementMissingError
from gdatalib.progress import AsyncioDispatcher, DeferredDispatcher, ProgressCallback, ProgressDispatcher
from gdatalib.xmlutil import (
    ParseContext,
    element_text,
    node_to_string,
    parse_document,
    required_text,
    timestamp_text,
    unsigned_text,
)

logger = structlog.get_logger()

_OPENSEARCH_FIELDS = {
    "totalResults": "total_results",
    "startIndex": "start_index",
    "itemsPerPage": "items_per_page",
}


@dataclass(eq=False)
class Feed:
    """A parsed ``<feed>``: read-only query results."""

    title: str | None = None
    subtitle: str | None = None
    id: str | None = None
    etag: str | None = None
    updated: datetime | None = None
    logo: str | None = None
    generator: Generator | None = None
    categories: list[Category] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    authors: list[Author] = field(default_factory=list)
    entries: list[Entry] = field(default_factory=list)
    items_per_page: int = 0
    start_index: int = 0
    total_results: int = 0
    extra_xml: str = ""

    element_name: ClassVar[str] = "feed"
    entry_type: ClassVar[type[Entry]] = Entry

    def parse_entry(self, node: ET.Element, context: ParseContext, entry_type: type[Entry] | None = None) -> Entry:
        """Build one typed entry from an ``<entry>`` node."""
        return (entry_type or self.entry_type).from_element(node, context)

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        """Apply one non-entry child of ``<feed>``; unknown elements are kept verbatim."""
        uri, name = ns.split_tag(node.tag)

        if uri == ns.ATOM and name in ("title", "subtitle", "id", "logo"):
            if getattr(self, name) is not None:
                raise DuplicateElementError(name, self.element_name)
            text = element_text(node)
            if text is None and name == "title":
                text = ""
            setattr(self, name, text)
        elif uri == ns.ATOM and name == "updated":
            if self.updated is not None:
                raise DuplicateElementError(name, self.element_name)
            self.updated = timestamp_text(node, self.element_name, context)
        elif uri == ns.ATOM and name == "category":
            self.categories.append(Category.from_element(node, context))
        elif uri == ns.ATOM and name == "link":
            self.links.append(Link.from_element(node, context))
        elif uri == ns.ATOM and name == "author":
            self.authors.append(Author.from_element(node, context))
        elif uri == ns.ATOM and name == "generator":
            if self.generator is not None:
                raise DuplicateElementError(name, self.element_name)
            self.generator = Generator.from_element(node, context)
        elif uri in ns.OPENSEARCH_URIS and name in _OPENSEARCH_FIELDS:
            attribute = _OPENSEARCH_FIELDS[name]
            if getattr(self, attribute) != 0:
                raise DuplicateElementError(context.display_name(node), self.element_name)
            setattr(self, attribute, unsigned_text(required_text(node, context)))
        else:
            logger.debug("Unhandled feed element", element=context.display_name(node), parent=self.element_name)
            self.extra_xml += node_to_string(node)

    def look_up_entry(self, entry_id: str) -> Entry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def look_up_link(self, rel: str) -> Link | None:
        for link in self.links:
            if link.rel == rel:
                return link
        return None


def parse_feed(
    xml: str | bytes,
    entry_type: type[Entry] | None = None,
    progress_callback: ProgressCallback | None = None,
    dispatcher: ProgressDispatcher | None = None,
    feed_type: type[Feed] = Feed,
) -> Feed:
    """Parse a ``<feed>`` document.

    Each entry is built with ``entry_type`` (or the feed type's default) and
    reported to ``progress_callback`` as ``(entry, index, total_hint)``. Without
    an explicit dispatcher the callbacks run on the calling thread, in document
    order, once the whole feed has parsed; a failed parse delivers none.
    """
    deferred = DeferredDispatcher() if dispatcher is None else None
    active_dispatcher = dispatcher or deferred

    try:
        feed = _parse_feed(xml, entry_type, progress_callback, active_dispatcher, feed_type)
    except Exception:
        if deferred is not None:
            deferred.discard()
        raise

    if deferred is not None:
        deferred.flush()
    return feed


def _parse_feed(
    xml: str | bytes,
    entry_type: type[Entry] | None,
    progress_callback: ProgressCallback | None,
    dispatcher: ProgressDispatcher,
    feed_type: type[Feed],
) -> Feed:
    root, context = parse_document(xml)
    if root.tag != ns.qname(ns.ATOM, "feed"):
        raise RequiredElementMissingError("feed", "root")

    feed = feed_type()
    feed.etag = root.get(ns.qname(ns.GD, "etag"))

    entry_tag = ns.qname(ns.ATOM, "entry")
    for child in root:
        if child.tag != entry_tag:
            feed.parse_one_child(child, context)
            continue

        entry = feed.parse_entry(child, context, entry_type)
        if progress_callback is not None:
            total_hint = min(feed.items_per_page, feed.total_results)
            dispatcher.schedule(progress_callback, entry, len(feed.entries), total_hint)
        feed.entries.append(entry)

    for name in ("title", "id", "updated"):
        if getattr(feed, name) is None:
            raise RequiredElementMissingError(name, feed.element_name)

    logger.debug("Parsed feed", feed_type=feed_type.__name__, id=feed.id, entries=len(feed.entries))
    return feed


async def parse_feed_async(
    xml: str | bytes,
    entry_type: type[Entry] | None = None,
    progress_callback: ProgressCallback | None = None,
    feed_type: type[Feed] = Feed,
) -> Feed:
    """Parse on a worker thread, delivering progress on the awaiting event loop."""
    dispatcher = AsyncioDispatcher(asyncio.get_running_loop())
    return await asyncio.to_thread(parse_feed, xml, entry_type, progress_callback, dispatcher, feed_type)
