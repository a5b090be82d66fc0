"""Daily import orchestration.

One :class:`ImportJob` fetches yesterday's feed, decodes it and upserts the
records into the search index. Stages run strictly in sequence and the first
error stops the job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from tweet_batch.index.indexer import DEFAULT_CHUNK_SIZE, SearchIndex, put_records
from tweet_batch.ingest.fetcher import (
    FEED_URL_TEMPLATE,
    FeedFetcher,
    feed_url,
    fetch_records,
)


logger = logging.getLogger(__name__)


class ImportState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    FETCHED = "fetched"
    INDEXING = "indexing"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATES = frozenset({ImportState.COMPLETED, ImportState.FAILED})


@dataclass(frozen=True)
class ImportResult:
    url: str
    fetched: int
    indexed: int
    state: ImportState


class ImportJob:
    def __init__(
        self,
        fetcher: FeedFetcher,
        index: SearchIndex,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        url_template: str = FEED_URL_TEMPLATE,
        now: datetime | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._index = index
        self._chunk_size = chunk_size
        self._url_template = url_template
        self._now = now
        self.state = ImportState.IDLE
        self.fetched = 0

    def run(self) -> ImportResult:
        if self.state is not ImportState.IDLE:
            raise RuntimeError(f"import job already ran (state={self.state.value})")

        logger.info("import started")
        self._transition(ImportState.FETCHING)
        try:
            url = feed_url(self._now, self._url_template)
            records = fetch_records(self._fetcher, url)
        except Exception:
            self._transition(ImportState.FAILED)
            raise

        self.fetched = len(records)
        self._transition(ImportState.FETCHED)
        logger.info("fetched %d tweets from %s", self.fetched, url)

        self._transition(ImportState.INDEXING)
        try:
            indexed = put_records(self._index, records, self._chunk_size)
        except Exception:
            self._transition(ImportState.FAILED)
            raise

        self._transition(ImportState.COMPLETED)
        logger.info("import completed, %d tweets indexed", indexed)
        return ImportResult(url=url, fetched=self.fetched, indexed=indexed, state=self.state)

    def _transition(self, state: ImportState) -> None:
        logger.debug("import state %s -> %s", self.state.value, state.value)
        self.state = state


def import_tweets(
    fetcher: FeedFetcher,
    index: SearchIndex,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    url_template: str = FEED_URL_TEMPLATE,
    now: datetime | None = None,
) -> ImportResult:
    job = ImportJob(
        fetcher, index, chunk_size=chunk_size, url_template=url_template, now=now
    )
    return job.run()
