"""XML parsing and serialization helpers shared by every GData type."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from xml.parsers import expat

from dateutil.parser import isoparser  # type: ignore[import-untyped]

from gdatalib import namespaces as ns
from gdatalib.errors import (
    EmptyDocumentError,
    NotIso8601Error,
    ParsingStringError,
    RequiredContentMissingError,
    RequiredPropertyMissingError,
    UnhandledElementError,
    UnknownPropertyValueError,
)

_NO_ELEMENTS = expat.errors.codes[expat.errors.XML_ERROR_NO_ELEMENTS]


@dataclass
class ParseContext:
    """Per-document state: the prefixes the document itself declared."""

    prefixes: dict[str, str] = field(default_factory=dict)

    def prefix_for(self, uri: str | None) -> str | None:
        if uri is None:
            return None
        return self.prefixes.get(uri) or ns.CANONICAL_PREFIXES.get(uri)

    def display_name(self, node: ET.Element) -> str:
        """Return ``prefix:name`` for a node, or the bare local name."""
        uri, local = ns.split_tag(node.tag)
        prefix = self.prefix_for(uri)
        return f"{prefix}:{local}" if prefix else local

    def unhandled(self, node: ET.Element, parent: str) -> UnhandledElementError:
        uri, local = ns.split_tag(node.tag)
        return UnhandledElementError(self.prefix_for(uri), local, parent)


def parse_document(xml: str | bytes) -> tuple[ET.Element, ParseContext]:
    """Parse a whole document, returning its root and the namespace context."""
    if not xml or not xml.strip():
        raise EmptyDocumentError()

    parser = ET.XMLPullParser(events=("start-ns", "start"))
    context = ParseContext()
    root: ET.Element | None = None

    def drain() -> None:
        nonlocal root
        for event, payload in parser.read_events():
            if event == "start-ns":
                prefix, uri = payload
                if prefix and uri not in context.prefixes:
                    context.prefixes[uri] = prefix
            elif root is None:
                root = payload

    try:
        parser.feed(xml)
        drain()
        parser.close()
        drain()
    except ET.ParseError as e:
        if root is None and e.code == _NO_ELEMENTS:
            raise EmptyDocumentError() from e
        raise ParsingStringError(str(e)) from e

    if root is None:
        raise EmptyDocumentError()
    return root, context


def is_element(node: ET.Element, uri: str, name: str) -> bool:
    return node.tag == ns.qname(uri, name)


def element_text(node: ET.Element) -> str | None:
    """Concatenated character data of a node, or None when it has none."""
    text = "".join(node.itertext())
    return text or None


def required_text(node: ET.Element, context: ParseContext) -> str:
    text = element_text(node)
    if text is None:
        raise RequiredContentMissingError(context.display_name(node))
    return text


def required_attr(node: ET.Element, name: str, context: ParseContext) -> str:
    value = node.get(name)
    if value is None:
        raise RequiredPropertyMissingError(context.display_name(node), name)
    return value


def bool_attr(node: ET.Element, name: str, context: ParseContext, default: bool | None = None) -> bool | None:
    """Read a ``true``/``false`` attribute; anything else is a content error."""
    value = node.get(name)
    if value is None:
        if default is None:
            raise RequiredPropertyMissingError(context.display_name(node), name)
        return default
    if value == "true":
        return True
    if value == "false":
        return False
    raise UnknownPropertyValueError(context.display_name(node), name, value)


def int_attr(node: ET.Element, name: str, default: int = -1) -> int:
    """Read an unsigned integer attribute, falling back to ``default``."""
    value = node.get(name)
    if value is None:
        return default
    match = re.match(r"\s*(\d+)", value)
    return int(match.group(1)) if match else default


def unsigned_text(text: str) -> int:
    """Leading unsigned digits of ``text``, or 0 when there are none."""
    match = re.match(r"\s*\+?(\d+)", text)
    return int(match.group(1)) if match else 0


_ISO_PARSER = isoparser(sep="T")


def parse_iso8601(value: str) -> datetime | None:
    """Parse an ISO 8601 date-time (extended or basic format) into UTC.

    Returns None when the text is not a date-time. A bare date is not
    accepted here; all-day values are read by their own element.
    """
    text = value.strip()
    if "T" not in text:
        return None
    try:
        parsed = _ISO_PARSER.isoparse(text)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def timestamp_text(node: ET.Element, parent: str, context: ParseContext) -> datetime:
    """Parse a node's text as an ISO 8601 timestamp."""
    text = required_text(node, context)
    parsed = parse_iso8601(text)
    if parsed is None:
        raise NotIso8601Error(context.display_name(node), parent, text)
    return parsed


def format_iso8601(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += f".{value.microsecond:06d}"
    return text + "Z"


def escape_text(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def node_to_string(node: ET.Element) -> str:
    """Serialize a node (without its tail) for opaque storage."""
    tail, node.tail = node.tail, None
    try:
        return ET.tostring(node, encoding="unicode")
    finally:
        node.tail = tail


class Verbatim(str):
    """An attribute value written without escaping (URIs and tokens)."""


Attributes = Iterable[tuple[str, object]]


class XmlWriter:
    """Append-only builder for the single-quoted XML GData servers accept."""

    def __init__(self, escape_all_attributes: bool = False):
        self.escape_all_attributes = escape_all_attributes
        self._parts: list[str] = []

    def _value(self, value: object) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, datetime):
            return format_iso8601(value)
        return str(value)

    def _attributes(self, attrs: Attributes) -> str:
        out = []
        for name, value in attrs:
            if value is None:
                continue
            text = self._value(value)
            if not isinstance(value, Verbatim) or self.escape_all_attributes:
                text = escape_text(text)
            out.append(f" {name}='{text}'")
        return "".join(out)

    def start(self, tag: str, attrs: Attributes = ()) -> None:
        self._parts.append(f"<{tag}{self._attributes(attrs)}>")

    def end(self, tag: str) -> None:
        self._parts.append(f"</{tag}>")

    def empty(self, tag: str, attrs: Attributes = ()) -> None:
        self._parts.append(f"<{tag}{self._attributes(attrs)}/>")

    def element(self, tag: str, text: object, attrs: Attributes = ()) -> None:
        """Write ``<tag attrs>text</tag>``, skipping it when ``text`` is None."""
        if text is None:
            return
        self._parts.append(f"<{tag}{self._attributes(attrs)}>{escape_text(self._value(text))}</{tag}>")

    def raw(self, xml: str) -> None:
        self._parts.append(xml)

    def getvalue(self) -> str:
        return "".join(self._parts)
