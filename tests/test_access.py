"""Unit tests for access control list entries."""

import pytest

from gdatalib.access import ACCESS_RULE_KIND, SCOPE_DEFAULT, SCOPE_USER, AccessRule
from gdatalib.entry import parse_entry
from gdatalib.errors import RequiredPropertyMissingError, UnhandledElementError
from gdatalib.feed import parse_feed

NAMESPACES = (
    "xmlns='http://www.w3.org/2005/Atom' "
    "xmlns:gAcl='http://schemas.google.com/acl/2007'"
)

RULE = f"""<entry {NAMESPACES}>
  <id>http://www.google.com/calendar/feeds/liz%40gmail.com/acl/full/user%3Aliz%40gmail.com</id>
  <updated>2009-04-17T15:00:00.000Z</updated>
  <category scheme='http://schemas.google.com/g/2005#kind' term='http://schemas.google.com/acl/2007#accessRule'/>
  <title>owner</title>
  <link rel='edit' href='http://www.google.com/calendar/feeds/liz%40gmail.com/acl/full/user%3Aliz%40gmail.com'/>
  <gAcl:scope type='user' value='liz@gmail.com'/>
  <gAcl:role value='http://schemas.google.com/gCal/2005#owner'/>
</entry>
"""


class TestAccessRule:
    """Tests for AccessRule."""

    def test_parse(self):
        """Should read the role and the scope."""
        rule = parse_entry(RULE, AccessRule)
        assert rule.role == "http://schemas.google.com/gCal/2005#owner"
        assert rule.scope_type == SCOPE_USER
        assert rule.scope_value == "liz@gmail.com"
        assert rule.categories == [ACCESS_RULE_KIND]

    def test_scope_value_is_optional(self):
        """Should accept a scope without a value."""
        rule = parse_entry(f"<entry {NAMESPACES}><gAcl:scope type='default'/></entry>", AccessRule)
        assert rule.scope_type == SCOPE_DEFAULT
        assert rule.scope_value is None

    def test_required_properties(self):
        """Should require the role value and the scope type."""
        with pytest.raises(RequiredPropertyMissingError) as exc:
            parse_entry(f"<entry {NAMESPACES}><gAcl:role/></entry>", AccessRule)
        assert (exc.value.element, exc.value.property) == ("gAcl:role", "value")

        with pytest.raises(RequiredPropertyMissingError) as exc:
            parse_entry(f"<entry {NAMESPACES}><gAcl:scope value='liz@gmail.com'/></entry>", AccessRule)
        assert (exc.value.element, exc.value.property) == ("gAcl:scope", "type")

    def test_unknown_acl_child(self):
        """Should reject gAcl elements it does not know."""
        with pytest.raises(UnhandledElementError) as exc:
            parse_entry(f"<entry {NAMESPACES}><gAcl:withKey/></entry>", AccessRule)
        assert str(exc.value) == "Unhandled <gAcl:withKey> element as a child of <entry>."

    def test_write_adds_kind_and_title(self):
        """Should add the kind category and use the role as the title."""
        rule = AccessRule(role="writer", scope_type=SCOPE_USER, scope_value="liz@gmail.com")
        assert rule.to_xml() == (
            "<entry xmlns='http://www.w3.org/2005/Atom' xmlns:gAcl='http://schemas.google.com/acl/2007'>"
            "<title type='text'>writer</title>"
            "<category term='http://schemas.google.com/acl/2007#accessRule' scheme='http://schemas.google.com/g/2005#kind'/>"
            "<gAcl:role value='writer'/>"
            "<gAcl:scope type='user' value='liz@gmail.com'/>"
            "</entry>"
        )

    def test_write_keeps_existing_kind(self):
        """Should not add the kind category twice."""
        rule = parse_entry(RULE, AccessRule)
        assert rule.to_xml().count("#accessRule") == 1
        assert parse_entry(rule.to_xml(), AccessRule) == rule

    def test_write_scope_without_value(self):
        """Should write a default scope that has no value."""
        rule = AccessRule(role="reader", scope_type=SCOPE_DEFAULT)
        assert rule.to_xml().endswith("<gAcl:role value='reader'/><gAcl:scope type='default'/></entry>")


def test_acl_feed():
    xml = (
        f"<feed {NAMESPACES}><title>ACL</title><id>urn:acl</id><updated>2009-04-17T15:00:00Z</updated>"
        "<entry><title>reader</title><gAcl:role value='reader'/><gAcl:scope type='domain' value='example.com'/></entry>"
        "</feed>"
    )
    feed = parse_feed(xml, entry_type=AccessRule)
    assert isinstance(feed.entries[0], AccessRule)
    assert feed.entries[0].scope_value == "example.com"
