"""Google Documents List entries, told apart by their resource ID."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar

from gdatalib import namespaces as ns
from gdatalib.atom import Author, Link
from gdatalib.entry import Entry
from gdatalib.feed import Feed
from gdatalib.xmlutil import ParseContext, XmlWriter, bool_attr, element_text, is_element, timestamp_text

KIND_SCHEME = "http://schemas.google.com/g/2005#kind"


class DocumentKind(str, Enum):
    TEXT = "document"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"
    FOLDER = "folder"
    UNKNOWN = "unknown"


def classify_document(node: ET.Element) -> DocumentKind:
    """Decide which document type an ``<entry>`` node describes.

    The ``gd:resourceId`` prefix (``spreadsheet:0Ab...``) wins; entries
    without one fall back to the label of their kind category.
    """
    for child in node:
        if is_element(child, ns.GD, "resourceId"):
            prefix, _, _ = (element_text(child) or "").partition(":")
            return _kind(prefix)

    for child in node:
        if is_element(child, ns.ATOM, "category") and child.get("scheme") == KIND_SCHEME:
            return _kind(child.get("label") or "")
    return DocumentKind.UNKNOWN


def _kind(value: str) -> DocumentKind:
    try:
        return DocumentKind(value)
    except ValueError:
        return DocumentKind.UNKNOWN


@dataclass(eq=True)
class DocumentsEntry(Entry):
    edited: datetime | None = None
    last_viewed: datetime | None = None
    writers_can_invite: bool = False
    document_id: str | None = None
    last_modified_by: Author | None = None

    kind: ClassVar[DocumentKind] = DocumentKind.UNKNOWN
    # Only folders and presentations send their resource ID back to the server.
    writes_resource_id: ClassVar[bool] = False

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.APP and name == "edited":
            self.edited = timestamp_text(node, self.element_name, context)
        elif uri == ns.GD and name == "lastViewed":
            self.last_viewed = timestamp_text(node, self.element_name, context)
        elif uri == ns.DOCUMENTS and name == "writersCanInvite":
            self.writers_can_invite = bool(bool_attr(node, "value", context))
        elif uri == ns.GD and name == "resourceId":
            _, _, document_id = (element_text(node) or "").partition(":")
            self.document_id = document_id or None
        elif uri == ns.GD and name == "feedLink":
            self.links.append(Link.from_element(node, context))
        elif uri == ns.GD and name == "lastModifiedBy":
            self.last_modified_by = Author.from_element(node, context, tag="gd:lastModifiedBy")
        else:
            super().parse_one_child(node, context)

    def emit_body(self, writer: XmlWriter) -> None:
        super().emit_body(writer)
        writer.empty("docs:writersCanInvite", [("value", self.writers_can_invite)])
        if self.writes_resource_id and self.document_id is not None:
            writer.element("gd:resourceId", f"{self.kind.value}:{self.document_id}")

    def declared_namespaces(self) -> dict[str, str]:
        return {**super().declared_namespaces(), "gd": ns.GD, "docs": ns.DOCUMENTS, "app": ns.APP}


@dataclass(eq=True)
class DocumentsText(DocumentsEntry):
    kind: ClassVar[DocumentKind] = DocumentKind.TEXT


@dataclass(eq=True)
class DocumentsSpreadsheet(DocumentsEntry):
    kind: ClassVar[DocumentKind] = DocumentKind.SPREADSHEET


@dataclass(eq=True)
class DocumentsPresentation(DocumentsEntry):
    kind: ClassVar[DocumentKind] = DocumentKind.PRESENTATION
    writes_resource_id: ClassVar[bool] = True


@dataclass(eq=True)
class DocumentsFolder(DocumentsEntry):
    kind: ClassVar[DocumentKind] = DocumentKind.FOLDER
    writes_resource_id: ClassVar[bool] = True


DOCUMENT_TYPES: dict[DocumentKind, type[DocumentsEntry]] = {
    DocumentKind.TEXT: DocumentsText,
    DocumentKind.SPREADSHEET: DocumentsSpreadsheet,
    DocumentKind.PRESENTATION: DocumentsPresentation,
    DocumentKind.FOLDER: DocumentsFolder,
    DocumentKind.UNKNOWN: DocumentsEntry,
}


@dataclass(eq=False)
class DocumentsFeed(Feed):
    entry_type: ClassVar[type[Entry]] = DocumentsEntry

    def parse_entry(self, node: ET.Element, context: ParseContext, entry_type: type[Entry] | None = None) -> Entry:
        if entry_type is not None:
            return entry_type.from_element(node, context)
        return DOCUMENT_TYPES[classify_document(node)].from_element(node, context)
