"""Fetch a GData feed over HTTP and hand the body to the feed parser."""

from __future__ import annotations

import httpx
import structlog

from gdatalib.config import settings
from gdatalib.entry import Entry
from gdatalib.errors import ServiceError
from gdatalib.feed import Feed, parse_feed
from gdatalib.progress import ProgressCallback, ProgressDispatcher

logger = structlog.get_logger()


def _headers(auth_token: str | None) -> dict[str, str]:
    headers = {"User-Agent": settings.user_agent, "GData-Version": settings.gdata_version}
    if auth_token:
        headers["Authorization"] = f"GoogleLogin auth={auth_token}"
    return headers


def fetch(uri: str, *, auth_token: str | None = None, client: httpx.Client | None = None) -> bytes:
    """GET ``uri`` once; anything outside 2xx raises ``ServiceError``."""
    owns_client = client is None
    http = client or httpx.Client(timeout=settings.request_timeout_seconds, follow_redirects=True)
    try:
        response = http.get(uri, headers=_headers(auth_token))
    finally:
        if owns_client:
            http.close()

    logger.debug("Service query", uri=uri, status=response.status_code)
    if not response.is_success:
        logger.warning("Service query failed", uri=uri, status=response.status_code)
        raise ServiceError(response.status_code, uri)
    return response.content


def query(
    uri: str,
    entry_type: type[Entry] | None = None,
    *,
    feed_type: type[Feed] = Feed,
    progress_callback: ProgressCallback | None = None,
    dispatcher: ProgressDispatcher | None = None,
    auth_token: str | None = None,
    client: httpx.Client | None = None,
) -> Feed:
    """Fetch and parse one page of a feed."""
    body = fetch(uri, auth_token=auth_token, client=client)
    return parse_feed(
        body,
        entry_type=entry_type,
        progress_callback=progress_callback,
        dispatcher=dispatcher,
        feed_type=feed_type,
    )
