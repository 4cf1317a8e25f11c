"""Google Calendar entries: calendars, events and their feed."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from gdatalib import namespaces as ns
from gdatalib.entry import Entry
from gdatalib.errors import InvalidContentError
from gdatalib.feed import Feed
from gdatalib.gd import FeedLink, When, Where, Who
from gdatalib.xmlutil import (
    ParseContext,
    Verbatim,
    XmlWriter,
    element_text,
    is_element,
    required_attr,
    timestamp_text,
    unsigned_text,
)

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

EVENT_STATUS_CANCELED = "http://schemas.google.com/g/2005#event.canceled"
EVENT_STATUS_CONFIRMED = "http://schemas.google.com/g/2005#event.confirmed"
EVENT_STATUS_TENTATIVE = "http://schemas.google.com/g/2005#event.tentative"


@dataclass(frozen=True)
class Color:
    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def from_hexadecimal(cls, value: str) -> Color | None:
        match = _HEX_COLOR.match(value)
        if not match:
            return None
        red, green, blue = (int(part, 16) for part in match.groups())
        return cls(red, green, blue)

    def to_hexadecimal(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


def _value(node: ET.Element, context: ParseContext) -> str:
    return required_attr(node, "value", context)


def _flag(node: ET.Element, context: ParseContext) -> bool:
    return _value(node, context) == "true"


@dataclass(eq=True)
class CalendarCalendar(Entry):
    timezone: str | None = None
    times_cleaned: int = 0
    is_hidden: bool = False
    color: Color = field(default_factory=Color)
    is_selected: bool = False
    access_level: str | None = None
    edited: datetime | None = None

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.CALENDAR and name == "timezone":
            self.timezone = _value(node, context)
        elif uri == ns.CALENDAR and name == "timesCleaned":
            self.times_cleaned = unsigned_text(_value(node, context))
        elif uri == ns.CALENDAR and name == "hidden":
            self.is_hidden = _flag(node, context)
        elif uri == ns.CALENDAR and name == "color":
            value = _value(node, context)
            color = Color.from_hexadecimal(value)
            if color is None:
                raise InvalidContentError("gCal:color", value)
            self.color = color
        elif uri == ns.CALENDAR and name == "selected":
            self.is_selected = _flag(node, context)
        elif uri == ns.CALENDAR and name == "accesslevel":
            self.access_level = _value(node, context)
        elif uri == ns.APP and name == "edited":
            self.edited = timestamp_text(node, self.element_name, context)
        else:
            super().parse_one_child(node, context)

    def emit_body(self, writer: XmlWriter) -> None:
        super().emit_body(writer)
        if self.timezone is not None:
            writer.empty("gCal:timezone", [("value", self.timezone)])
        writer.empty("gCal:hidden", [("value", self.is_hidden)])
        writer.empty("gCal:color", [("value", self.color.to_hexadecimal())])
        writer.empty("gCal:selected", [("value", self.is_selected)])

    def declared_namespaces(self) -> dict[str, str]:
        return {**super().declared_namespaces(), "gCal": ns.CALENDAR, "app": ns.APP}


@dataclass(eq=True)
class CalendarEvent(Entry):
    edited: datetime | None = None
    comments_feed_link: FeedLink | None = None
    status: str | None = None
    visibility: str | None = None
    transparency: str | None = None
    uid: str | None = None
    sequence: int = 0
    times: list[When] = field(default_factory=list)
    guests_can_modify: bool = False
    guests_can_invite_others: bool = False
    guests_can_see_guests: bool = False
    anyone_can_add_self: bool = False
    people: list[Who] = field(default_factory=list)
    places: list[Where] = field(default_factory=list)
    recurrence: str | None = None
    original_event_id: str | None = None
    original_event_uri: str | None = None

    _FLAGS: ClassVar[dict[str, str]] = {
        "guestsCanModify": "guests_can_modify",
        "guestsCanInviteOthers": "guests_can_invite_others",
        "guestsCanSeeGuests": "guests_can_see_guests",
        "anyoneCanAddSelf": "anyone_can_add_self",
    }
    _GD_VALUES: ClassVar[dict[str, str]] = {
        "eventStatus": "status",
        "visibility": "visibility",
        "transparency": "transparency",
    }

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.APP and name == "edited":
            self.edited = timestamp_text(node, self.element_name, context)
        elif uri == ns.GD and name == "comments":
            for child in node:
                if not is_element(child, ns.GD, "feedLink"):
                    raise context.unhandled(child, "gd:comments")
                self.comments_feed_link = FeedLink.from_element(child, context)
        elif uri == ns.GD and name in self._GD_VALUES:
            setattr(self, self._GD_VALUES[name], _value(node, context))
        elif uri == ns.CALENDAR and name == "uid":
            self.uid = _value(node, context)
        elif uri == ns.CALENDAR and name == "sequence":
            self.sequence = unsigned_text(_value(node, context))
        elif uri == ns.GD and name == "when":
            self.times.append(When.from_element(node, context))
        elif uri == ns.CALENDAR and name in self._FLAGS:
            setattr(self, self._FLAGS[name], _flag(node, context))
        elif uri == ns.GD and name == "who":
            self.people.append(Who.from_element(node, context))
        elif uri == ns.GD and name == "where":
            self.places.append(Where.from_element(node, context))
        elif uri == ns.GD and name == "recurrence":
            self.recurrence = element_text(node)
        elif uri == ns.GD and name == "originalEvent":
            self.original_event_id = node.get("id")
            self.original_event_uri = node.get("href")
        else:
            super().parse_one_child(node, context)

    def emit_body(self, writer: XmlWriter) -> None:
        super().emit_body(writer)
        for name, attribute in self._GD_VALUES.items():
            value = getattr(self, attribute)
            if value is not None:
                writer.empty(f"gd:{name}", [("value", Verbatim(value))])
        if self.uid is not None:
            writer.empty("gCal:uid", [("value", Verbatim(self.uid))])
        if self.sequence:
            writer.empty("gCal:sequence", [("value", self.sequence)])
        for name, attribute in self._FLAGS.items():
            writer.empty(f"gCal:{name}", [("value", getattr(self, attribute))])
        writer.element("gd:recurrence", self.recurrence)
        for when in self.times:
            when.write(writer)
        for who in self.people:
            who.write(writer)
        for where in self.places:
            where.write(writer)

    def declared_namespaces(self) -> dict[str, str]:
        return {**super().declared_namespaces(), "gd": ns.GD, "gCal": ns.CALENDAR, "app": ns.APP}


@dataclass(eq=False)
class CalendarFeed(Feed):
    timezone: str | None = None
    times_cleaned: int = 0

    entry_type: ClassVar[type[Entry]] = CalendarEvent

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.CALENDAR and name == "timezone":
            self.timezone = _value(node, context)
        elif uri == ns.CALENDAR and name == "timesCleaned":
            self.times_cleaned = unsigned_text(_value(node, context))
        else:
            super().parse_one_child(node, context)
