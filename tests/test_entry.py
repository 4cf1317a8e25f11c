"""Unit tests for the Atom entry object model."""

from datetime import UTC, datetime

import pytest

from gdatalib.atom import Author, Category, Link
from gdatalib.config import settings
from gdatalib.entry import Entry, parse_entry
from gdatalib.errors import (
    EmptyDocumentError,
    NotIso8601Error,
    ParsingStringError,
    RequiredElementMissingError,
    UnhandledElementError,
)

SIMPLE_ENTRY = (
    "<entry xmlns='http://www.w3.org/2005/Atom'>"
    "<title type='text'>T</title>"
    "<id>urn:x</id>"
    "<updated>2009-04-17T15:00:00Z</updated>"
    "<link href='http://e.com/' rel='self'/>"
    "</entry>"
)

FULL_ENTRY = """<?xml version='1.0' encoding='UTF-8'?>
<entry xmlns='http://www.w3.org/2005/Atom' xmlns:gd='http://schemas.google.com/g/2005' gd:etag='W/"abc"'>
  <id>http://example.com/id</id>
  <title type='text'>Testing title &amp; escaping</title>
  <published>2009-01-23T14:06:37.000Z</published>
  <updated>2009-01-25T14:07:37.880860Z</updated>
  <content type='text'>This is some sample content &lt;markup&gt;</content>
  <category term='Film' scheme='http://gdata.youtube.com/schemas/2007/categories.cat' label='Film &amp; Animation'/>
  <link href='http://example.com/' rel='self' type='application/atom+xml'/>
  <author><name>Joe Bloggs</name><email>joe@example.com</email></author>
</entry>
"""


class TestParseEntry:
    """Tests for parse_entry()."""

    def test_simple_entry(self):
        """Should read the basic Atom fields."""
        entry = parse_entry(SIMPLE_ENTRY)
        assert entry.title == "T"
        assert entry.id == "urn:x"
        assert entry.updated == datetime(2009, 4, 17, 15, 0, tzinfo=UTC)
        assert entry.links == [Link("http://e.com/", rel="self")]
        assert entry.is_inserted()

    def test_full_entry(self):
        """Should read every Atom element and the etag."""
        entry = parse_entry(FULL_ENTRY)
        assert entry.etag == 'W/"abc"'
        assert entry.title == "Testing title & escaping"
        assert entry.content == "This is some sample content <markup>"
        assert not entry.content_is_uri
        assert entry.published == datetime(2009, 1, 23, 14, 6, 37, tzinfo=UTC)
        assert entry.updated == datetime(2009, 1, 25, 14, 7, 37, 880860, tzinfo=UTC)
        assert entry.categories[0].label == "Film & Animation"
        assert entry.authors == [Author("Joe Bloggs", email="joe@example.com")]
        assert entry.look_up_link("self").type == "application/atom+xml"
        assert entry.look_up_link("edit") is None

    def test_content_src(self):
        """Should keep out-of-line content as a URI."""
        entry = parse_entry(
            "<entry xmlns='http://www.w3.org/2005/Atom'><title>T</title>"
            "<content type='image/png' src='http://example.com/a.png'/></entry>"
        )
        assert entry.content == "http://example.com/a.png"
        assert entry.content_is_uri

    def test_empty_title(self):
        """Should read an empty title as the empty string."""
        entry = parse_entry("<entry xmlns='http://www.w3.org/2005/Atom'><title/></entry>")
        assert entry.title == ""

    def test_unknown_child(self):
        """Should fail on an element the entry does not understand."""
        xml = (
            "<entry xmlns='http://www.w3.org/2005/Atom' xmlns:foo='http://example.com/foo'>"
            "<title>T</title><foo:bar/></entry>"
        )
        with pytest.raises(UnhandledElementError) as exc:
            parse_entry(xml)
        assert (exc.value.prefix, exc.value.name, exc.value.parent) == ("foo", "bar", "entry")
        assert str(exc.value) == "Unhandled <foo:bar> element as a child of <entry>."

    def test_bad_timestamp(self):
        """Should reject an updated value that is not ISO 8601."""
        with pytest.raises(NotIso8601Error) as exc:
            parse_entry("<entry xmlns='http://www.w3.org/2005/Atom'><updated>yesterday</updated></entry>")
        assert exc.value.value == "yesterday"
        assert exc.value.parent == "entry"

    def test_wrong_root(self):
        """Should reject a document whose root is not an entry."""
        with pytest.raises(RequiredElementMissingError) as exc:
            parse_entry("<feed xmlns='http://www.w3.org/2005/Atom'/>")
        assert (exc.value.element, exc.value.parent) == ("entry", "root")

    def test_bad_documents(self):
        """Should surface empty and malformed documents."""
        with pytest.raises(EmptyDocumentError):
            parse_entry("")
        with pytest.raises(ParsingStringError):
            parse_entry("<entry")


class TestToXml:
    """Tests for Entry.to_xml()."""

    def make_entry(self) -> Entry:
        return Entry(
            title="Testing title & escaping",
            content="Sample <markup> & content",
            categories=[
                Category("Film", "http://gdata.youtube.com/schemas/2007/categories.cat", "Film & Animation")
            ],
            links=[Link("http://test.mn/", rel="related", title="A link", type="text/html", hreflang="de", length=5010)],
            authors=[Author("Joe Bloggs", "http://example.com/", "joe@example.com")],
        )

    def test_exact_output(self):
        """Should write the entry in a fixed element order."""
        assert self.make_entry().to_xml() == (
            "<entry xmlns='http://www.w3.org/2005/Atom'>"
            "<title type='text'>Testing title &amp; escaping</title>"
            "<content type='text'>Sample &lt;markup&gt; &amp; content</content>"
            "<category term='Film' scheme='http://gdata.youtube.com/schemas/2007/categories.cat' "
            "label='Film &amp; Animation'/>"
            "<link href='http://test.mn/' title='A link' rel='related' type='text/html' hreflang='de' length='5010'/>"
            "<author><name>Joe Bloggs</name><uri>http://example.com/</uri><email>joe@example.com</email></author>"
            "</entry>"
        )

    def test_timestamps_and_content_src(self):
        """Should write id, timestamps and out-of-line content."""
        entry = Entry(
            title="T",
            id="urn:x",
            updated=datetime(2009, 4, 17, 15, 0, tzinfo=UTC),
            content="http://example.com/a.png",
            content_is_uri=True,
        )
        assert entry.to_xml() == (
            "<entry xmlns='http://www.w3.org/2005/Atom'><title type='text'>T</title><id>urn:x</id>"
            "<updated>2009-04-17T15:00:00Z</updated><content src='http://example.com/a.png'/></entry>"
        )

    def test_round_trip(self):
        """Should parse its own output back to an equal entry."""
        entry = parse_entry(FULL_ENTRY)
        entry.etag = None
        assert Entry.from_xml(entry.to_xml()) == entry

    def test_title_required(self):
        """Should refuse to serialize an entry without a title."""
        with pytest.raises(ValueError):
            Entry(id="urn:x").to_xml()

    def test_attribute_escaping_toggle(self, monkeypatch):
        """Should escape term and href only when asked to."""
        entry = Entry(title="T", categories=[Category("a&b")])
        assert "<category term='a&b'/>" in entry.to_xml()
        assert "<category term='a&amp;b'/>" in entry.to_xml(escape_all_attributes=True)

        monkeypatch.setattr(settings, "escape_all_attributes", True)
        assert "<category term='a&amp;b'/>" in entry.to_xml()


class TestIsInserted:
    """Tests for Entry.is_inserted()."""

    def test_new_entry(self):
        """Should be false for a locally built entry."""
        assert not Entry(title="T").is_inserted()

    def test_epoch_updated(self):
        """Should be false when updated is the epoch."""
        entry = Entry(
            title="T", id="urn:x", links=[Link("http://e.com/")], updated=datetime(1970, 1, 1, tzinfo=UTC)
        )
        assert not entry.is_inserted()

    def test_no_links(self):
        """Should be false without any links."""
        entry = Entry(title="T", id="urn:x", updated=datetime(2009, 4, 17, tzinfo=UTC))
        assert not entry.is_inserted()
