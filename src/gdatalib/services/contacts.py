"""Google Contacts entries."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime

from gdatalib import namespaces as ns
from gdatalib.entry import Entry
from gdatalib.gd import EmailAddress, IMAddress, Organization, PhoneNumber, PostalAddress
from gdatalib.xmlutil import (
    ParseContext,
    Verbatim,
    XmlWriter,
    bool_attr,
    escape_text,
    node_to_string,
    required_attr,
    timestamp_text,
)


@dataclass(frozen=True)
class ExtendedProperty:
    """A ``gd:extendedProperty``: a plain ``value`` or an opaque XML payload."""

    name: str
    value: str
    is_xml: bool = False

    def write(self, writer: XmlWriter) -> None:
        if self.is_xml:
            writer.start("gd:extendedProperty", [("name", self.name)])
            writer.raw(self.value)
            writer.end("gd:extendedProperty")
        else:
            writer.empty("gd:extendedProperty", [("name", self.name), ("value", self.value)])


@dataclass(eq=True)
class ContactsContact(Entry):
    edited: datetime | None = None
    email_addresses: list[EmailAddress] = field(default_factory=list)
    im_addresses: list[IMAddress] = field(default_factory=list)
    phone_numbers: list[PhoneNumber] = field(default_factory=list)
    postal_addresses: list[PostalAddress] = field(default_factory=list)
    organizations: list[Organization] = field(default_factory=list)
    extended_properties: dict[str, ExtendedProperty] = field(default_factory=dict)
    groups: dict[str, bool] = field(default_factory=dict)
    deleted: bool = False

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.APP and name == "edited":
            self.edited = timestamp_text(node, self.element_name, context)
        elif uri == ns.GD and name == "email":
            self.email_addresses.append(EmailAddress.from_element(node, context))
        elif uri == ns.GD and name == "im":
            self.im_addresses.append(IMAddress.from_element(node, context))
        elif uri == ns.GD and name == "phoneNumber":
            self.phone_numbers.append(PhoneNumber.from_element(node, context))
        elif uri == ns.GD and name == "postalAddress":
            self.postal_addresses.append(PostalAddress.from_element(node, context))
        elif uri == ns.GD and name == "organization":
            self.organizations.append(Organization.from_element(node, context))
        elif uri == ns.GD and name == "extendedProperty":
            self._parse_extended_property(node, context)
        elif uri == ns.CONTACTS and name == "groupMembershipInfo":
            href = required_attr(node, "href", context)
            self.groups[href] = bool(bool_attr(node, "deleted", context, default=False))
        elif uri == ns.GD and name == "deleted":
            self.deleted = True
        else:
            super().parse_one_child(node, context)

    def _parse_extended_property(self, node: ET.Element, context: ParseContext) -> None:
        name = required_attr(node, "name", context)
        value = node.get("value")
        if value is not None:
            self.extended_properties[name] = ExtendedProperty(name, value)
            return
        payload = escape_text(node.text or "") + "".join(
            node_to_string(child) + escape_text(child.tail or "") for child in node
        )
        self.extended_properties[name] = ExtendedProperty(name, payload, is_xml=True)

    def emit_body(self, writer: XmlWriter) -> None:
        super().emit_body(writer)
        for values in (
            self.email_addresses,
            self.im_addresses,
            self.phone_numbers,
            self.postal_addresses,
            self.organizations,
        ):
            for value in values:
                value.write(writer)
        for extended_property in self.extended_properties.values():
            extended_property.write(writer)
        for href, deleted in self.groups.items():
            writer.empty(
                "gContact:groupMembershipInfo",
                [("href", Verbatim(href)), ("deleted", True if deleted else None)],
            )

    def declared_namespaces(self) -> dict[str, str]:
        return {**super().declared_namespaces(), "gd": ns.GD, "gContact": ns.CONTACTS, "app": ns.APP}

    @property
    def primary_email_address(self) -> EmailAddress | None:
        for address in self.email_addresses:
            if address.primary:
                return address
        return None

    def set_extended_property(self, name: str, value: str | None) -> None:
        """Set a plain-valued extended property; ``None`` removes it."""
        if value is None:
            self.extended_properties.pop(name, None)
        else:
            self.extended_properties[name] = ExtendedProperty(name, value)
