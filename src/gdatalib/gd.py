"""Value records for the common GData (``gd``) extension elements."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time

from gdatalib import namespaces as ns
from gdatalib.errors import DuplicateElementError, InvalidContentError, NotIso8601Error
from gdatalib.xmlutil import (
    ParseContext,
    Verbatim,
    XmlWriter,
    bool_attr,
    element_text,
    format_iso8601,
    int_attr,
    is_element,
    parse_iso8601,
    required_attr,
    required_text,
    unsigned_text,
)

def _primary(node: ET.Element, context: ParseContext) -> bool:
    return bool(bool_attr(node, "primary", context, default=False))


def _token(value: str | None) -> Verbatim | None:
    return Verbatim(value) if value is not None else None


@dataclass(frozen=True)
class Rating:
    min: int
    max: int
    num_raters: int = 0
    average: float = 0.0

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "Rating":
        minimum = required_attr(node, "min", context)
        maximum = required_attr(node, "max", context)
        average = node.get("average")
        try:
            average_value = float(average) if average else 0.0
        except ValueError as e:
            raise InvalidContentError(context.display_name(node), average) from e
        return cls(
            min=unsigned_text(minimum),
            max=unsigned_text(maximum),
            num_raters=int_attr(node, "numRaters", default=0),
            average=average_value,
        )


@dataclass(frozen=True)
class FeedLink:
    href: str
    rel: str | None = None
    count_hint: int = 0

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "FeedLink":
        return cls(
            href=required_attr(node, "href", context),
            rel=node.get("rel"),
            count_hint=int_attr(node, "countHint", default=0),
        )

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "gd:feedLink",
            [("href", Verbatim(self.href)), ("rel", _token(self.rel)), ("countHint", self.count_hint or None)],
        )


@dataclass(frozen=True)
class Who:
    rel: str | None = None
    value_string: str | None = None
    email: str | None = None

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "Who":
        return cls(rel=node.get("rel"), value_string=node.get("valueString"), email=node.get("email"))

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "gd:who",
            [("email", _token(self.email)), ("rel", _token(self.rel)), ("valueString", self.value_string)],
        )


@dataclass(frozen=True)
class Where:
    rel: str | None = None
    value_string: str | None = None
    label: str | None = None

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "Where":
        return cls(rel=node.get("rel"), value_string=node.get("valueString"), label=node.get("label"))

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "gd:where",
            [("label", self.label), ("rel", _token(self.rel)), ("valueString", self.value_string)],
        )


@dataclass(frozen=True)
class Reminder:
    """A ``gd:reminder``; relative reminders are normalised to minutes."""

    method: str | None = None
    absolute_time: datetime | None = None
    relative_minutes: int = -1

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "Reminder":
        absolute_time = None
        absolute = node.get("absoluteTime")
        if absolute is not None:
            absolute_time = parse_iso8601(absolute)
            if absolute_time is None:
                raise NotIso8601Error("absoluteTime", context.display_name(node), absolute)
            return cls(method=node.get("method"), absolute_time=absolute_time)

        minutes = -1
        for unit, scale in (("days", 60 * 24), ("hours", 60), ("minutes", 1)):
            value = node.get(unit)
            if value is not None:
                minutes = int_attr(node, unit, default=0) * scale
                break
        return cls(method=node.get("method"), relative_minutes=minutes)

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "gd:reminder",
            [
                ("absoluteTime", self.absolute_time),
                ("minutes", self.relative_minutes if self.absolute_time is None and self.relative_minutes >= 0 else None),
                ("method", _token(self.method)),
            ],
        )


@dataclass(frozen=True)
class When:
    start_time: datetime
    end_time: datetime | None = None
    is_date: bool = False
    value_string: str | None = None
    reminders: tuple[Reminder, ...] = field(default_factory=tuple)

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "When":
        name = context.display_name(node)
        start = required_attr(node, "startTime", context)
        is_date = "T" not in start
        start_time = _parse_when_time(start, is_date)
        if start_time is None:
            raise NotIso8601Error("startTime", name, start)

        end_time = None
        end = node.get("endTime")
        if end is not None:
            end_time = _parse_when_time(end, is_date)
            if end_time is None:
                raise NotIso8601Error("endTime", name, end)

        reminders = []
        for child in node:
            if not is_element(child, ns.GD, "reminder"):
                raise context.unhandled(child, name)
            reminders.append(Reminder.from_element(child, context))

        return cls(
            start_time=start_time,
            end_time=end_time,
            is_date=is_date,
            value_string=node.get("value"),
            reminders=tuple(reminders),
        )

    def write(self, writer: XmlWriter) -> None:
        attrs = [
            ("startTime", Verbatim(self._format(self.start_time))),
            ("endTime", Verbatim(self._format(self.end_time)) if self.end_time else None),
            ("value", self.value_string),
        ]
        if not self.reminders:
            writer.empty("gd:when", attrs)
            return
        writer.start("gd:when", attrs)
        for reminder in self.reminders:
            reminder.write(writer)
        writer.end("gd:when")

    def _format(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%d") if self.is_date else format_iso8601(value)


def _parse_when_time(value: str, is_date: bool) -> datetime | None:
    if not is_date:
        return parse_iso8601(value)
    try:
        day = date.fromisoformat(value.strip())
    except ValueError:
        return None
    return datetime.combine(day, time(), tzinfo=UTC)


@dataclass(frozen=True)
class EmailAddress:
    address: str
    rel: str | None = None
    label: str | None = None
    primary: bool = False

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "EmailAddress":
        return cls(
            address=required_attr(node, "address", context),
            rel=node.get("rel"),
            label=node.get("label"),
            primary=_primary(node, context),
        )

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "gd:email",
            [
                ("address", Verbatim(self.address)),
                ("rel", _token(self.rel)),
                ("label", self.label),
                ("primary", self.primary),
            ],
        )


@dataclass(frozen=True)
class IMAddress:
    address: str
    protocol: str | None = None
    rel: str | None = None
    label: str | None = None
    primary: bool = False

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "IMAddress":
        return cls(
            address=required_attr(node, "address", context),
            protocol=node.get("protocol"),
            rel=node.get("rel"),
            label=node.get("label"),
            primary=_primary(node, context),
        )

    def write(self, writer: XmlWriter) -> None:
        writer.empty(
            "gd:im",
            [
                ("address", Verbatim(self.address)),
                ("protocol", _token(self.protocol)),
                ("rel", _token(self.rel)),
                ("label", self.label),
                ("primary", self.primary),
            ],
        )


@dataclass(frozen=True)
class PhoneNumber:
    number: str
    rel: str | None = None
    label: str | None = None
    uri: str | None = None
    primary: bool = False

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "PhoneNumber":
        return cls(
            number=required_text(node, context).strip(),
            rel=node.get("rel"),
            label=node.get("label"),
            uri=node.get("uri"),
            primary=_primary(node, context),
        )

    def write(self, writer: XmlWriter) -> None:
        writer.element(
            "gd:phoneNumber",
            self.number,
            [
                ("uri", _token(self.uri)),
                ("rel", _token(self.rel)),
                ("label", self.label),
                ("primary", self.primary),
            ],
        )


@dataclass(frozen=True)
class PostalAddress:
    address: str
    rel: str | None = None
    label: str | None = None
    primary: bool = False

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "PostalAddress":
        return cls(
            address=required_text(node, context),
            rel=node.get("rel"),
            label=node.get("label"),
            primary=_primary(node, context),
        )

    def write(self, writer: XmlWriter) -> None:
        writer.element(
            "gd:postalAddress",
            self.address,
            [("rel", _token(self.rel)), ("label", self.label), ("primary", self.primary)],
        )


@dataclass(frozen=True)
class Organization:
    name: str | None = None
    title: str | None = None
    rel: str | None = None
    label: str | None = None
    primary: bool = False

    @classmethod
    def from_element(cls, node: ET.Element, context: ParseContext) -> "Organization":
        parent = context.display_name(node)
        values: dict[str, str | None] = {}
        for child in node:
            for key, tag in (("name", "orgName"), ("title", "orgTitle")):
                if is_element(child, ns.GD, tag):
                    if key in values:
                        raise DuplicateElementError(context.display_name(child), parent)
                    values[key] = element_text(child)
                    break
            else:
                raise context.unhandled(child, parent)

        return cls(
            name=values.get("name"),
            title=values.get("title"),
            rel=node.get("rel"),
            label=node.get("label"),
            primary=_primary(node, context),
        )

    def write(self, writer: XmlWriter) -> None:
        writer.start("gd:organization", [("rel", _token(self.rel)), ("label", self.label), ("primary", self.primary)])
        writer.element("gd:orgName", self.name)
        writer.element("gd:orgTitle", self.title)
        writer.end("gd:organization")
