"""The Atom entry object model that every service entry extends."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

import structlog

from gdatalib import namespaces as ns
from gdatalib.atom import Author, Category, Link
from gdatalib.config import settings
from gdatalib.errors import RequiredElementMissingError
from gdatalib.xmlutil import ParseContext, XmlWriter, element_text, parse_document, timestamp_text

logger = structlog.get_logger()


@dataclass(eq=True)
class Entry:
    """One Atom ``<entry>``.

    Subclasses extend the XML shape through three hooks, each of which must
    chain to the parent implementation:

    * ``parse_one_child`` recognises their own elements first and falls back
      to ``super()`` for anything else.
    * ``emit_body`` calls ``super()`` first, then appends their own elements.
    * ``declared_namespaces`` merges their prefixes into the parent's.
    """

    title: str | None = None
    id: str | None = None
    etag: str | None = None
    updated: datetime | None = None
    published: datetime | None = None
    content: str | None = None
    content_is_uri: bool = False
    categories: list[Category] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    authors: list[Author] = field(default_factory=list)

    element_name: ClassVar[str] = "entry"

    @classmethod
    def from_xml(cls, xml: str | bytes) -> Entry:
        """Parse a standalone ``<entry>`` document."""
        root, context = parse_document(xml)
        if root.tag != ns.qname(ns.ATOM, "entry"):
            raise RequiredElementMissingError("entry", "root")
        return cls.from_element(root, context)

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> Entry:
        entry = cls()
        entry.etag = node.get(ns.qname(ns.GD, "etag"))
        for child in node:
            entry.parse_one_child(child, context)
        return entry

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri != ns.ATOM:
            raise context.unhandled(node, self.element_name)

        if name == "title":
            self.title = element_text(node) or ""
        elif name == "id":
            self.id = element_text(node)
        elif name == "updated":
            self.updated = timestamp_text(node, self.element_name, context)
        elif name == "published":
            self.published = timestamp_text(node, self.element_name, context)
        elif name == "category":
            self.categories.append(Category.from_element(node, context))
        elif name == "content":
            text = element_text(node)
            if text is None and node.get("src") is not None:
                self.content = node.get("src")
                self.content_is_uri = True
            else:
                self.content = text
                self.content_is_uri = False
        elif name == "link":
            self.links.append(Link.from_element(node, context))
        elif name == "author":
            self.authors.append(Author.from_element(node, context))
        else:
            raise context.unhandled(node, self.element_name)

    def emit_body(self, writer: XmlWriter) -> None:
        if self.title is None:
            raise ValueError("An entry must have a title before it can be serialized.")
        writer.element("title", self.title, [("type", "text")])
        writer.element("id", self.id)
        writer.element("updated", self.updated)
        writer.element("published", self.published)
        if self.content is not None:
            if self.content_is_uri:
                writer.empty("content", [("src", self.content)])
            else:
                writer.element("content", self.content, [("type", "text")])
        for category in self.categories:
            category.write(writer)
        for link in self.links:
            link.write(writer)
        for author in self.authors:
            author.write(writer)

    def declared_namespaces(self) -> dict[str, str]:
        """Prefix to URI mappings the root ``<entry>`` must declare."""
        return {}

    def to_xml(self, escape_all_attributes: bool | None = None) -> str:
        if escape_all_attributes is None:
            escape_all_attributes = settings.escape_all_attributes
        writer = XmlWriter(escape_all_attributes=escape_all_attributes)
        namespaces = [("xmlns", ns.ATOM)]
        namespaces.extend((f"xmlns:{prefix}", uri) for prefix, uri in sorted(self.declared_namespaces().items()))
        writer.start(self.element_name, namespaces)
        self.emit_body(writer)
        writer.end(self.element_name)
        return writer.getvalue()

    def is_inserted(self) -> bool:
        """Whether the entry has been round-tripped through the server."""
        return (
            self.id is not None
            and len(self.links) > 0
            and self.updated is not None
            and self.updated.timestamp() != 0
        )

    def look_up_link(self, rel: str) -> Link | None:
        for link in self.links:
            if link.rel == rel:
                return link
        return None


def parse_entry(xml: str | bytes, entry_type: type[Entry] = Entry) -> Entry:
    entry = entry_type.from_xml(xml)
    logger.debug("Parsed entry", entry_type=entry_type.__name__, id=entry.id)
    return entry
