"""Access control list entries (``gAcl:role`` and ``gAcl:scope``)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from gdatalib import namespaces as ns
from gdatalib.atom import Category
from gdatalib.entry import Entry
from gdatalib.xmlutil import ParseContext, Verbatim, XmlWriter, required_attr

KIND_SCHEME = "http://schemas.google.com/g/2005#kind"
ACCESS_RULE_KIND = Category(term=f"{ns.ACL}#accessRule", scheme=KIND_SCHEME)

SCOPE_USER = "user"
SCOPE_DOMAIN = "domain"
SCOPE_DEFAULT = "default"


@dataclass(eq=True)
class AccessRule(Entry):
    """Who (``scope``) may do what (``role``) with a resource.

    Writing a rule adds the access-rule kind category when it is missing
    and uses the role as the title when there is none.
    """

    role: str | None = None
    scope_type: str | None = None
    scope_value: str | None = None

    def parse_one_child(self, node: ET.Element, context: ParseContext) -> None:
        uri, name = ns.split_tag(node.tag)
        if uri == ns.ACL and name == "role":
            self.role = required_attr(node, "value", context)
        elif uri == ns.ACL and name == "scope":
            self.scope_type = required_attr(node, "type", context)
            self.scope_value = node.get("value")
        else:
            super().parse_one_child(node, context)

    def emit_body(self, writer: XmlWriter) -> None:
        if ACCESS_RULE_KIND not in self.categories:
            self.categories.append(ACCESS_RULE_KIND)
        if self.title is None:
            self.title = self.role
        super().emit_body(writer)

        if self.role is not None:
            writer.empty("gAcl:role", [("value", Verbatim(self.role))])
        if self.scope_type is not None or self.scope_value is not None:
            writer.empty(
                "gAcl:scope",
                [
                    ("type", Verbatim(self.scope_type) if self.scope_type else None),
                    ("value", self.scope_value),
                ],
            )

    def declared_namespaces(self) -> dict[str, str]:
        return {**super().declared_namespaces(), "gAcl": ns.ACL}
