"""Pytest fixtures for gdatalib tests."""

import pytest

ATOM_FEED = """<?xml version='1.0' encoding='UTF-8'?>
<feed xmlns='http://www.w3.org/2005/Atom'
      xmlns:openSearch='http://a9.com/-/spec/opensearch/1.1/'
      xmlns:gd='http://schemas.google.com/g/2005'
      xmlns:foo='http://example.com/foo'
      gd:etag='W/"CUMBRHo_fip7ImA9WxRbGU0."'>
  <id>http://example.com/feeds/test</id>
  <updated>2009-04-17T15:00:00Z</updated>
  <title type='text'>Test feed</title>
  <subtitle>Things &amp; stuff</subtitle>
  <logo>http://example.com/logo.png</logo>
  <link rel='self' type='application/atom+xml' href='http://example.com/feeds/test?start-index=1'/>
  <link rel='next' type='application/atom+xml' href='http://example.com/feeds/test?start-index=4'/>
  <author><name>Feed Owner</name><uri>http://example.com/owner</uri></author>
  <generator version='2.0' uri='http://example.com/gen'>Example Generator</generator>
  <foo:bar>Opaque value</foo:bar>
  <openSearch:totalResults>10</openSearch:totalResults>
  <openSearch:startIndex>1</openSearch:startIndex>
  <openSearch:itemsPerPage>3</openSearch:itemsPerPage>
  <entry>
    <id>urn:entry:a</id>
    <updated>2009-04-17T14:00:00Z</updated>
    <title>A</title>
    <link rel='self' href='http://example.com/entries/a'/>
  </entry>
  <entry>
    <id>urn:entry:b</id>
    <updated>2009-04-17T13:00:00Z</updated>
    <title>B</title>
    <link rel='self' href='http://example.com/entries/b'/>
  </entry>
  <entry>
    <id>urn:entry:c</id>
    <updated>2009-04-17T12:00:00Z</updated>
    <title>C</title>
    <link rel='self' href='http://example.com/entries/c'/>
  </entry>
</feed>
"""


def minimal_feed(body: str, extra_namespaces: str = "") -> str:
    """Wrap ``body`` in a feed that already has a title, id and updated."""
    return (
        "<feed xmlns='http://www.w3.org/2005/Atom' "
        "xmlns:openSearch='http://a9.com/-/spec/opensearch/1.1/'"
        f"{extra_namespaces}>"
        "<title>Feed</title><id>urn:feed</id><updated>2009-04-17T15:00:00Z</updated>"
        f"{body}</feed>"
    )


@pytest.fixture
def atom_feed() -> str:
    return ATOM_FEED
