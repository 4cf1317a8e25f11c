"""Unit tests for the XML parsing and writing helpers."""

from datetime import UTC, datetime

import pytest

from gdatalib.errors import EmptyDocumentError, ParsingStringError
from gdatalib.xmlutil import (
    Verbatim,
    XmlWriter,
    escape_text,
    format_iso8601,
    parse_document,
    parse_iso8601,
    unsigned_text,
)


class TestParseIso8601:
    """Tests for parse_iso8601()."""

    def test_utc_designator(self):
        """Should parse a Z-suffixed timestamp as UTC."""
        assert parse_iso8601("2009-04-17T15:00:00Z") == datetime(2009, 4, 17, 15, 0, tzinfo=UTC)

    def test_offset_is_normalised_to_utc(self):
        """Should convert a numeric offset to UTC."""
        assert parse_iso8601("2009-04-17T15:00:00+02:00") == datetime(2009, 4, 17, 13, 0, tzinfo=UTC)
        assert parse_iso8601("2009-04-17T15:00:00-0130") == datetime(2009, 4, 17, 16, 30, tzinfo=UTC)

    def test_fractional_seconds(self):
        """Should keep fractional seconds to microsecond precision."""
        parsed = parse_iso8601("2009-01-25T14:07:37.880Z")
        assert parsed == datetime(2009, 1, 25, 14, 7, 37, 880000, tzinfo=UTC)

    def test_basic_format(self):
        """Should accept the compact basic format without separators."""
        assert parse_iso8601("20090417T150000Z") == datetime(2009, 4, 17, 15, 0, tzinfo=UTC)
        assert parse_iso8601("20090417T150000+0200") == datetime(2009, 4, 17, 13, 0, tzinfo=UTC)

    def test_missing_zone_is_utc(self):
        """Should treat a timestamp without a zone designator as UTC."""
        assert parse_iso8601("2009-04-17T15:00:00") == datetime(2009, 4, 17, 15, 0, tzinfo=UTC)

    def test_rejects_date_only_and_garbage(self):
        """Should return None for text that is not a date-time."""
        assert parse_iso8601("2009-04-17") is None
        assert parse_iso8601("not a date") is None
        assert parse_iso8601("2009-13-40T00:00:00Z") is None


class TestFormatIso8601:
    """Tests for format_iso8601()."""

    def test_whole_seconds(self):
        """Should omit the fraction when there are no microseconds."""
        assert format_iso8601(datetime(2009, 4, 17, 15, 0, tzinfo=UTC)) == "2009-04-17T15:00:00Z"

    def test_microseconds(self):
        """Should write six fractional digits."""
        value = datetime(2009, 1, 25, 14, 7, 37, 880860, tzinfo=UTC)
        assert format_iso8601(value) == "2009-01-25T14:07:37.880860Z"

    def test_naive_is_treated_as_utc(self):
        """Should treat a naive datetime as UTC."""
        assert format_iso8601(datetime(2009, 4, 17, 15, 0)) == "2009-04-17T15:00:00Z"

    def test_round_trip(self):
        """Should parse back to the same instant."""
        value = datetime(2010, 2, 3, 4, 5, 6, 7, tzinfo=UTC)
        assert parse_iso8601(format_iso8601(value)) == value


def test_escape_text():
    assert escape_text("a & b < c > d \"e\" 'f'") == "a &amp; b &lt; c &gt; d &quot;e&quot; &apos;f&apos;"


def test_unsigned_text_reads_leading_digits():
    assert unsigned_text("42") == 42
    assert unsigned_text(" 17 results") == 17
    assert unsigned_text("none") == 0


class TestParseDocument:
    """Tests for parse_document()."""

    def test_records_declared_prefixes(self):
        """Should remember the prefix each namespace was declared with."""
        root, context = parse_document(
            "<entry xmlns='http://www.w3.org/2005/Atom' xmlns:g='http://schemas.google.com/g/2005'/>"
        )
        assert root.tag == "{http://www.w3.org/2005/Atom}entry"
        assert context.prefix_for("http://schemas.google.com/g/2005") == "g"

    def test_falls_back_to_canonical_prefix(self):
        """Should use the well-known prefix for namespaces bound as the default."""
        _, context = parse_document("<feed xmlns='http://search.yahoo.com/mrss/'/>")
        assert context.prefix_for("http://search.yahoo.com/mrss/") == "media"
        assert context.prefix_for(None) is None

    @pytest.mark.parametrize("xml", ["", "   ", b"", "<?xml version='1.0'?>"])
    def test_empty_document(self, xml):
        """Should raise EmptyDocumentError when there is no root element."""
        with pytest.raises(EmptyDocumentError, match="Empty document."):
            parse_document(xml)

    def test_malformed_document(self):
        """Should raise ParsingStringError for broken markup."""
        with pytest.raises(ParsingStringError, match="Error parsing XML"):
            parse_document("<entry><title>unclosed</entry>")


class TestXmlWriter:
    """Tests for XmlWriter."""

    def test_single_quoted_attributes(self):
        """Should write single-quoted attributes and skip None values."""
        writer = XmlWriter()
        writer.empty("link", [("href", Verbatim("http://e.com/")), ("title", None), ("length", 5)])
        assert writer.getvalue() == "<link href='http://e.com/' length='5'/>"

    def test_verbatim_values_are_not_escaped(self):
        """Should leave Verbatim values alone unless escaping everything."""
        writer = XmlWriter()
        writer.empty("category", [("term", Verbatim("a&b")), ("label", "a&b")])
        assert writer.getvalue() == "<category term='a&b' label='a&amp;b'/>"

        writer = XmlWriter(escape_all_attributes=True)
        writer.empty("category", [("term", Verbatim("a&b")), ("label", "a&b")])
        assert writer.getvalue() == "<category term='a&amp;b' label='a&amp;b'/>"

    def test_element_values(self):
        """Should render booleans and datetimes and skip None text."""
        writer = XmlWriter()
        writer.element("flag", True)
        writer.element("when", datetime(2009, 4, 17, 15, 0, tzinfo=UTC))
        writer.element("missing", None)
        writer.element("text", "<b>")
        assert writer.getvalue() == (
            "<flag>true</flag><when>2009-04-17T15:00:00Z</when><text>&lt;b&gt;</text>"
        )
