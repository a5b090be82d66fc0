from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Protocol

import requests

from tweet_batch.errors import FetchError
from tweet_batch.ingest.decoder import decode_records
from tweet_batch.schema import Record


FEED_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/t-analyzers/t-analyzers.github.io"
    "/master/data/tweets_{date}.json"
)
FEED_DATE_FORMAT = "%Y%m%d"

logger = logging.getLogger(__name__)


class FeedFetcher(Protocol):
    def fetch(self, url: str) -> bytes:
        ...


def feed_url(now: datetime | None = None, template: str = FEED_URL_TEMPLATE) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    yesterday = now - timedelta(hours=24)
    return template.format(date=yesterday.strftime(FEED_DATE_FORMAT))


class RequestsFetcher:
    """Retrieve the feed body with ``requests``.

    The HTTP status is not checked: an error page is handed to the decoder,
    which rejects it unless it happens to be a JSON array.
    """

    def __init__(
        self, session: requests.Session | None = None, timeout: float | None = None
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def fetch(self, url: str) -> bytes:
        logger.debug("GET %s", url)
        try:
            with self._session.get(url, stream=True, timeout=self._timeout) as response:
                if not response.ok:
                    logger.warning("feed %s answered HTTP %d", url, response.status_code)
                return response.content
        except requests.RequestException as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc


def fetch_records(fetcher: FeedFetcher, url: str) -> list[Record]:
    body = fetcher.fetch(url)
    return decode_records(body)
