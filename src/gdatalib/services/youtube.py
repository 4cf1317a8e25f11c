"""YouTube video entries and their extended ``media:group``."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import date, datetime

from gdatalib import namespaces as ns
from gdatalib.entry import Entry
from gdatalib.errors import InvalidContentError, NotIso8601Error
from gdatalib.gd import FeedLink, Rating
from gdatalib.media import MediaGroup
from gdatalib.xmlutil import (
    ParseContext,
    XmlWriter,
    element_text,
    int_attr,
    is_element,
    parse_iso8601,
    required_attr,
    required_text,
    unsigned_text,
)


@dataclass
class YouTubeMediaGroup(MediaGroup):
    duration: int = 0
    is_private: bool = False
    uploaded: datetime | None = None
    video_id: str | None = None
    no_embed: bool = False

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri != ns.YOUTUBE:
            super().parse_one_child(node, context)
        elif name == "duration":
            self.duration = unsigned_text(required_attr(node, "seconds", context))
        elif name == "private":
            self.is_private = True
        elif name == "uploaded":
            text = element_text(node) or ""
            uploaded = parse_iso8601(text)
            if uploaded is None:
                raise NotIso8601Error("uploaded", self.TAG, text)
            self.uploaded = uploaded
        elif name == "videoid":
            self.video_id = element_text(node)
        elif name == "noembed":
            self.no_embed = True
        else:
            raise context.unhandled(node, self.TAG)

    def write_body(self, writer: XmlWriter) -> None:
        super().write_body(writer)
        if self.is_private:
            writer.empty("yt:private")
        if self.no_embed:
            writer.empty("yt:noembed")


@dataclass(frozen=True)
class YouTubeState:
    """Publication state from ``app:control/yt:state``."""

    name: str
    message: str | None = None
    reason_code: str | None = None
    help_uri: str | None = None


@dataclass(eq=True)
class YouTubeVideo(Entry):
    media_group: YouTubeMediaGroup = field(default_factory=YouTubeMediaGroup)
    rating: Rating | None = None
    comments_feed_link: FeedLink | None = None
    view_count: int = 0
    favorite_count: int = 0
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    recorded: date | None = None
    is_draft: bool = False
    state: YouTubeState | None = None

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.MEDIA and name == "group":
            for child in node:
                self.media_group.parse_one_child(child, context)
        elif uri == ns.GD and name == "rating":
            self.rating = Rating.from_element(node, context)
        elif uri == ns.GD and name == "comments":
            for child in node:
                if not is_element(child, ns.GD, "feedLink"):
                    raise context.unhandled(child, "gd:comments")
                self.comments_feed_link = FeedLink.from_element(child, context)
        elif uri == ns.YOUTUBE and name == "statistics":
            required_attr(node, "viewCount", context)
            self.view_count = int_attr(node, "viewCount", default=0)
            self.favorite_count = int_attr(node, "favoriteCount", default=0)
        elif uri == ns.YOUTUBE and name == "location":
            self.location = element_text(node)
        elif uri == ns.GEORSS and name == "where":
            self._parse_where(node, context)
        elif uri == ns.YOUTUBE and name == "noembed":
            self.media_group.no_embed = True
        elif uri == ns.YOUTUBE and name == "recorded":
            text = required_text(node, context)
            try:
                self.recorded = date.fromisoformat(text.strip())
            except ValueError as e:
                raise NotIso8601Error(context.display_name(node), self.element_name, text) from e
        elif uri == ns.APP and name == "control":
            self._parse_control(node, context)
        else:
            super().parse_one_child(node, context)

    def _parse_where(self, node: ET.Element, context: ParseContext) -> None:
        pos = node.find(f"{ns.qname(ns.GML, 'Point')}/{ns.qname(ns.GML, 'pos')}")
        if pos is None:
            return
        text = element_text(pos) or ""
        try:
            latitude, longitude = (float(part) for part in text.split())
        except ValueError as e:
            raise InvalidContentError("gml:pos", text) from e
        self.latitude, self.longitude = latitude, longitude

    def _parse_control(self, node: ET.Element, context: ParseContext) -> None:
        for child in node:
            if is_element(child, ns.APP, "draft"):
                self.is_draft = True
            elif is_element(child, ns.YOUTUBE, "state"):
                self.state = YouTubeState(
                    name=required_attr(child, "name", context),
                    message=element_text(child),
                    reason_code=child.get("reasonCode"),
                    help_uri=child.get("helpUrl"),
                )
            else:
                raise context.unhandled(child, "app:control")

    def emit_body(self, writer: XmlWriter) -> None:
        super().emit_body(writer)
        self.media_group.write(writer)
        writer.element("yt:location", self.location)
        if self.is_draft:
            writer.start("app:control")
            writer.empty("app:draft")
            writer.end("app:control")

    def declared_namespaces(self) -> dict[str, str]:
        namespaces = {**super().declared_namespaces(), "media": ns.MEDIA, "yt": ns.YOUTUBE}
        if self.is_draft:
            namespaces["app"] = ns.APP
        return namespaces

    @property
    def video_id(self) -> str | None:
        return self.media_group.video_id

    @property
    def duration(self) -> int:
        return self.media_group.duration

    @property
    def uploaded(self) -> datetime | None:
        return self.media_group.uploaded

    def is_restricted_in_country(self, country: str) -> bool:
        """Whether the video's ``media:restriction`` blocks ``country``."""
        restriction = self.media_group.restriction
        if restriction is None or not restriction.countries:
            return False
        listed = country.upper() in restriction.countries.upper().split()
        return listed != restriction.relationship
