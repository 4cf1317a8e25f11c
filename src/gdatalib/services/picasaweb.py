"""PicasaWeb albums and their photo and video entries."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

from gdatalib import namespaces as ns
from gdatalib.entry import Entry
from gdatalib.errors import DuplicateElementError, InvalidContentError
from gdatalib.media import MediaGroup
from gdatalib.xmlutil import ParseContext, XmlWriter, element_text, required_text, timestamp_text, unsigned_text

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(eq=True)
class PicasaWebFile(Entry):
    media_group: MediaGroup = field(default_factory=MediaGroup)
    edited: datetime | None = None
    version: str | None = None
    position: float = 0.0
    album_id: str | None = None
    width: int = 0
    height: int = 0
    size: int = 0
    client: str | None = None
    checksum: str | None = None
    timestamp: datetime | None = None
    is_commenting_enabled: bool = False
    comment_count: int = 0
    video_status: str | None = None
    rotation: int = 0

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.MEDIA and name == "group":
            self.media_group = MediaGroup.from_element(node, context)
        elif uri == ns.APP and name == "edited":
            self.edited = timestamp_text(node, self.element_name, context)
        elif uri == ns.PHOTOS:
            self._parse_gphoto(node, name, context)
        else:
            super().parse_one_child(node, context)

    def _parse_gphoto(self, node: ET.Element, name: str, context: ParseContext) -> None:
        text = element_text(node) or ""
        if name == "imageVersion":
            self.version = text
        elif name == "position":
            try:
                self.position = float(text)
            except ValueError as e:
                raise InvalidContentError(context.display_name(node), text) from e
        elif name == "albumid":
            self.album_id = text
        elif name in ("width", "height", "size", "commentCount", "rotation"):
            attribute = "comment_count" if name == "commentCount" else name
            setattr(self, attribute, unsigned_text(text))
        elif name == "client":
            self.client = text
        elif name == "checksum":
            self.checksum = text
        elif name == "timestamp":
            self.timestamp = _from_ms(unsigned_text(text))
        elif name == "commentingEnabled":
            self.is_commenting_enabled = text.strip().lower() == "true"
        elif name == "videostatus":
            if self.video_status is not None:
                raise DuplicateElementError(context.display_name(node), self.element_name)
            self.video_status = text
        else:
            raise context.unhandled(node, self.element_name)

    def emit_body(self, writer: XmlWriter) -> None:
        super().emit_body(writer)
        writer.element("gphoto:imageVersion", self.version)
        writer.element("gphoto:position", f"{self.position:f}")
        writer.element("gphoto:albumid", self.album_id)
        writer.element("gphoto:client", self.client)
        writer.element("gphoto:checksum", self.checksum)
        if self.timestamp is not None:
            writer.element("gphoto:timestamp", self.timestamp_ms)
        writer.element("gphoto:commentingEnabled", self.is_commenting_enabled)
        if self.rotation > 0:
            writer.element("gphoto:rotation", self.rotation)
        self.media_group.write(writer)

    def declared_namespaces(self) -> dict[str, str]:
        return {
            **super().declared_namespaces(),
            "gphoto": ns.PHOTOS,
            "app": ns.APP,
            **self.media_group.declared_namespaces(),
        }

    @property
    def timestamp_ms(self) -> int | None:
        return _to_ms(self.timestamp) if self.timestamp is not None else None


class PicasaWebVisibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(eq=True)
class PicasaWebAlbum(Entry):
    """An album; its description and tags live on the media group."""

    media_group: MediaGroup = field(default_factory=MediaGroup)
    edited: datetime | None = None
    user: str | None = None
    nickname: str | None = None
    name: str | None = None
    location: str | None = None
    visibility: PicasaWebVisibility = PicasaWebVisibility.PUBLIC
    timestamp: datetime | None = None
    num_photos: int = 0
    num_photos_remaining: int = 0
    bytes_used: int = 0
    is_commenting_enabled: bool = False
    comment_count: int = 0

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.MEDIA and name == "group":
            group = MediaGroup.from_element(node, context)
            if group.description is None:
                group.description = self.media_group.description
            self.media_group = group
        elif uri == ns.APP and name == "edited":
            self.edited = timestamp_text(node, self.element_name, context)
        elif uri in (ns.PHOTOS, ns.ATOM) and name == "summary":
            self.media_group.description = element_text(node)
        elif uri == ns.PHOTOS:
            self._parse_gphoto(node, name, context)
        else:
            super().parse_one_child(node, context)

    def _parse_gphoto(self, node: ET.Element, name: str, context: ParseContext) -> None:
        if name in ("user", "nickname", "name"):
            setattr(self, name, required_text(node, context))
        elif name == "location":
            self.location = element_text(node)
        elif name == "access":
            access = element_text(node) or ""
            try:
                self.visibility = PicasaWebVisibility(access)
            except ValueError as e:
                raise InvalidContentError(context.display_name(node), access) from e
        elif name == "timestamp":
            self.timestamp = _from_ms(unsigned_text(element_text(node) or ""))
        elif name in _ALBUM_COUNTS:
            setattr(self, _ALBUM_COUNTS[name], unsigned_text(required_text(node, context)))
        elif name == "commentingEnabled":
            self.is_commenting_enabled = required_text(node, context) == "true"
        else:
            raise context.unhandled(node, self.element_name)

    def emit_body(self, writer: XmlWriter) -> None:
        super().emit_body(writer)
        writer.element("gphoto:location", self.location)
        writer.element("gphoto:access", self.visibility.value)
        if self.timestamp is not None:
            writer.element("gphoto:timestamp", _to_ms(self.timestamp))
        writer.element("gphoto:commentingEnabled", self.is_commenting_enabled)
        self.media_group.write(writer)

    def declared_namespaces(self) -> dict[str, str]:
        return {
            **super().declared_namespaces(),
            "gphoto": ns.PHOTOS,
            "app": ns.APP,
            **self.media_group.declared_namespaces(),
        }

    @property
    def description(self) -> str | None:
        return self.media_group.description

    @property
    def tags(self) -> str | None:
        return self.media_group.keywords


_ALBUM_COUNTS = {
    "numphotos": "num_photos",
    "numphotosremaining": "num_photos_remaining",
    "bytesUsed": "bytes_used",
    "commentCount": "comment_count",
}


def _from_ms(milliseconds: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=milliseconds)


def _to_ms(value: datetime) -> int:
    return (value - _EPOCH) // timedelta(milliseconds=1)
