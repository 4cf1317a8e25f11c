"""Atom value records shared by entries and feeds."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from gdatalib import namespaces as ns
from gdatalib.errors import DuplicateElementError, RequiredContentMissingError, RequiredElementMissingError
from gdatalib.xmlutil import ParseContext, Verbatim, XmlWriter, element_text, int_attr, is_element, required_attr

LINK_ALTERNATE = "alternate"
LINK_SELF = "self"
LINK_EDIT = "edit"
LINK_EDIT_MEDIA = "edit-media"
LINK_RELATED = "related"
LINK_ENCLOSURE = "enclosure"
LINK_VIA = "via"


@dataclass(frozen=True)
class Category:
    term: str
    scheme: str | None = None
    label: str | None = None

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "Category":
        return cls(
            term=required_attr(node, "term", context),
            scheme=node.get("scheme"),
            label=node.get("label"),
        )

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "category",
            [("term", Verbatim(self.term)), ("scheme", _verbatim(self.scheme)), ("label", self.label)],
        )


@dataclass(frozen=True)
class Link:
    """An Atom ``<link>``; ``length`` is -1 when unknown."""

    href: str
    rel: str = LINK_ALTERNATE
    title: str | None = None
    type: str | None = None
    hreflang: str | None = None
    length: int = -1

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "Link":
        return cls(
            href=node.get("href", ""),
            rel=node.get("rel") or LINK_ALTERNATE,
            title=node.get("title"),
            type=node.get("type"),
            hreflang=node.get("hreflang"),
            length=int_attr(node, "length"),
        )

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "link",
            [
                ("href", Verbatim(self.href)),
                ("title", self.title),
                ("rel", Verbatim(self.rel)),
                ("type", _verbatim(self.type)),
                ("hreflang", _verbatim(self.hreflang)),
                ("length", self.length if self.length != -1 else None),
            ],
        )


@dataclass(frozen=True)
class Author:
    name: str
    uri: str | None = None
    email: str | None = None

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext, tag: str = "author") -> "Author":
        """Parse an Atom person construct; ``tag`` names it in error messages."""
        fields: dict[str, str] = {}
        for child in node:
            for name in ("name", "uri", "email"):
                if is_element(child, ns.ATOM, name):
                    if name in fields:
                        raise DuplicateElementError(name, tag)
                    text = element_text(child)
                    if text is None:
                        raise RequiredContentMissingError(name)
                    fields[name] = text
                    break
            else:
                raise context.unhandled(child, tag)

        if "name" not in fields:
            raise RequiredElementMissingError("name", tag)
        return cls(name=fields["name"], uri=fields.get("uri"), email=fields.get("email"))

    def write(self, writer: XmlWriter, tag: str = "author") -> None:
        writer.start(tag)
        writer.element("name", self.name)
        writer.element("uri", self.uri)
        writer.element("email", self.email)
        writer.end(tag)


@dataclass(frozen=True)
class Generator:
    name: str | None = None
    uri: str | None = None
    version: str | None = None

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "Generator":
        return cls(name=element_text(node), uri=node.get("uri"), version=node.get("version"))


def _verbatim(value: str | None) -> Verbatim | None:
    return Verbatim(value) if value is not None else None
