"""Namespace URIs used by Atom, GData and the service extensions."""

import xml.etree.ElementTree as ET

ATOM = "http://www.w3.org/2005/Atom"
APP = "http://www.w3.org/2007/app"
GD = "http://schemas.google.com/g/2005"
MEDIA = "http://search.yahoo.com/mrss/"
OPENSEARCH = "http://a9.com/-/spec/opensearch/1.1/"
OPENSEARCH_RSS = "http://a9.com/-/spec/opensearchrss/1.0/"
GEORSS = "http://www.georss.org/georss"
GML = "http://www.opengis.net/gml"
YOUTUBE = "http://gdata.youtube.com/schemas/2007"
CALENDAR = "http://schemas.google.com/gCal/2005"
CONTACTS = "http://schemas.google.com/contact/2008"
DOCUMENTS = "http://schemas.google.com/docs/2007"
PHOTOS = "http://schemas.google.com/photos/2007"
ACL = "http://schemas.google.com/acl/2007"

OPENSEARCH_URIS = frozenset({OPENSEARCH, OPENSEARCH_RSS})

# Prefixes used in error messages when a document binds a namespace to
# the default prefix or to one of its own choosing.
CANONICAL_PREFIXES: dict[str, str] = {
    APP: "app",
    GD: "gd",
    MEDIA: "media",
    OPENSEARCH: "openSearch",
    OPENSEARCH_RSS: "openSearch",
    GEORSS: "georss",
    GML: "gml",
    YOUTUBE: "yt",
    CALENDAR: "gCal",
    CONTACTS: "gContact",
    DOCUMENTS: "docs",
    PHOTOS: "gphoto",
    ACL: "gAcl",
}

for _uri, _prefix in CANONICAL_PREFIXES.items():
    if _uri != OPENSEARCH_RSS:
        ET.register_namespace(_prefix, _uri)

# Atom stays unprefixed in messages, but serialized fragments need a readable prefix.
ET.register_namespace("atom", ATOM)


def qname(uri: str, name: str) -> str:
    """Return the ElementTree ``{uri}name`` form."""
    return f"{{{uri}}}{name}"


def split_tag(tag: str) -> tuple[str | None, str]:
    """Split an ElementTree tag into ``(namespace_uri, local_name)``."""
    if tag.startswith("{"):
        uri, _, local = tag[1:].partition("}")
        return uri, local
    return None, tag
