"""Media RSS value records and the ``media:group`` container."""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum

from gdatalib import namespaces as ns
from gdatalib.errors import RequiredPropertyMissingError, UnknownPropertyValueError
from gdatalib.xmlutil import ParseContext, Verbatim, XmlWriter, element_text, int_attr

_NPT = re.compile(r"^(\d{2}):(\d{2}):(\d+(?:\.\d+)?)$")


class MediaExpression(str, Enum):
    SAMPLE = "sample"
    FULL = "full"
    NONSTOP = "nonstop"


@dataclass(frozen=True)
class MediaRating:
    scheme: str | None = None
    country: str | None = None


@dataclass(frozen=True)
class MediaRestriction:
    countries: str | None
    relationship: bool


@dataclass(frozen=True)
class MediaCategory:
    category: str
    label: str | None = None
    scheme: str | None = None

    def write(self, writer: XmlWriter) -> None:
        attrs = [("label", self.label), ("scheme", Verbatim(self.scheme) if self.scheme else None)]
        writer.element("media:category", self.category, attrs)


@dataclass(frozen=True)
class MediaCredit:
    credit: str | None
    partner: bool = False


@dataclass(frozen=True)
class MediaContent:
    uri: str | None
    type: str | None
    is_default: bool = False
    expression: MediaExpression = MediaExpression.FULL
    duration: int = -1
    format: int = -1

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "media:content",
            [
                ("url", self.uri),
                ("type", self.type),
                ("isDefault", self.is_default),
                ("expression", self.expression.value),
                ("duration", self.duration if self.duration != -1 else None),
                ("yt:format", self.format if self.format != -1 else None),
            ],
        )


@dataclass(frozen=True)
class MediaThumbnail:
    uri: str | None
    width: int
    height: int
    time_ms: int = -1

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "media:thumbnail",
            [
                ("url", self.uri),
                ("height", self.height),
                ("width", self.width),
                ("time", build_time(self.time_ms) if self.time_ms != -1 else None),
            ],
        )


def parse_time(value: str) -> int:
    """Parse an NPT ``HH:MM:SS.fff`` offset into milliseconds, or -1."""
    match = _NPT.match(value)
    if not match:
        return -1
    hours, minutes, seconds = match.groups()
    return int(round((float(seconds) + int(minutes) * 60 + int(hours) * 3600) * 1000))


def build_time(milliseconds: int) -> str:
    hours, remainder = divmod(milliseconds, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    return f"{hours:02d}:{minutes:02d}:{remainder / 1000:06.3f}"


def _attr(node: ET.Element, name: str, uri: str | None = None) -> str | None:
    value = node.get(name)
    if value is None and uri is not None:
        value = node.get(ns.qname(uri, name))
    return value


@dataclass
class MediaGroup:
    """A ``media:group``: one video or photo's Media RSS description."""

    title: str | None = None
    description: str | None = None
    keywords: str | None = None
    player_uri: str | None = None
    rating: MediaRating | None = None
    restriction: MediaRestriction | None = None
    category: MediaCategory | None = None
    credit: MediaCredit | None = None
    contents: list[MediaContent] = field(default_factory=list)
    thumbnails: list[MediaThumbnail] = field(default_factory=list)

    TAG = "media:group"

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "MediaGroup":
        group = cls()
        for child in node:
            group.parse_one_child(child, context)
        return group

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri != ns.MEDIA:
            raise context.unhandled(node, self.TAG)

        if name == "title":
            self.title = element_text(node)
        elif name == "description":
            self.description = element_text(node)
        elif name == "keywords":
            self.keywords = element_text(node)
        elif name == "category":
            self.category = MediaCategory(
                category=element_text(node) or "", label=node.get("label"), scheme=node.get("scheme")
            )
        elif name == "content":
            self.contents.append(_parse_content(node))
        elif name == "credit":
            self.credit = _parse_credit(node)
        elif name == "player":
            self.player_uri = node.get("url")
        elif name == "rating":
            self.rating = MediaRating(scheme=node.get("scheme"), country=node.get("country"))
        elif name == "restriction":
            self.restriction = _parse_restriction(node)
        elif name == "thumbnail":
            self.thumbnails.append(_parse_thumbnail(node))
        else:
            raise context.unhandled(node, self.TAG)

    def write(self, writer: XmlWriter) -> None:
        writer.start(self.TAG)
        self.write_body(writer)
        writer.end(self.TAG)

    def write_body(self, writer: XmlWriter) -> None:
        if self.category is not None:
            self.category.write(writer)
        writer.element("media:title", self.title, [("type", "plain")])
        writer.element("media:description", self.description, [("type", "plain")])
        writer.element("media:keywords", self.keywords)
        for content in self.contents:
            content.write(writer)
        if self.player_uri is not None:
            writer.empty("media:player", [("url", self.player_uri)])
        for thumbnail in self.thumbnails:
            thumbnail.write(writer)

    def declared_namespaces(self) -> dict[str, str]:
        """Prefixes the written group uses; ``yt:format`` needs the YouTube one."""
        namespaces = {"media": ns.MEDIA}
        if any(content.format != -1 for content in self.contents):
            namespaces["yt"] = ns.YOUTUBE
        return namespaces

    def look_up_content(self, type: str) -> MediaContent | None:
        """Return the first content of the given MIME type."""
        for content in self.contents:
            if content.type == type:
                return content
        return None


def _parse_content(node: ET.Element) -> MediaContent:
    is_default = node.get("isDefault")
    if is_default not in (None, "true", "false"):
        raise UnknownPropertyValueError("media:content", "isDefault", is_default)

    expression = node.get("expression", MediaExpression.FULL.value)
    try:
        expression_value = MediaExpression(expression)
    except ValueError as e:
        raise UnknownPropertyValueError("media:content", "expression", expression) from e

    format_value = _attr(node, "format", ns.YOUTUBE)
    return MediaContent(
        uri=node.get("url"),
        type=node.get("type"),
        is_default=is_default == "true",
        expression=expression_value,
        duration=int_attr(node, "duration"),
        format=int(format_value) if format_value and format_value.isdigit() else -1,
    )


def _parse_credit(node: ET.Element) -> MediaCredit:
    role = node.get("role")
    if role != "uploader":
        raise UnknownPropertyValueError("media:credit", "role", str(role))
    credit_type = node.get("type")
    if credit_type is not None and credit_type != "partner":
        raise UnknownPropertyValueError("media:credit", "type", credit_type)
    return MediaCredit(credit=element_text(node), partner=credit_type is not None)


def _parse_restriction(node: ET.Element) -> MediaRestriction:
    restriction_type = node.get("type")
    if restriction_type != "country":
        raise UnknownPropertyValueError("media:restriction", "type", str(restriction_type))
    relationship = node.get("relationship")
    if relationship not in ("allow", "deny"):
        raise UnknownPropertyValueError("media:restriction", "relationship", str(relationship))
    return MediaRestriction(countries=element_text(node), relationship=relationship == "allow")


def _parse_thumbnail(node: ET.Element) -> MediaThumbnail:
    for name in ("width", "height"):
        if node.get(name) is None:
            raise RequiredPropertyMissingError("media:thumbnail", name)

    time_ms = -1
    time = node.get("time")
    if time is not None:
        time_ms = parse_time(time)
        if time_ms == -1:
            raise UnknownPropertyValueError("media:thumbnail", "time", time)

    return MediaThumbnail(
        uri=node.get("url"),
        width=int_attr(node, "width", default=0),
        height=int_attr(node, "height", default=0),
        time_ms=time_ms,
    )
