from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from tweet_batch.schema import IndexDocument, Record


FIXTURES = Path(__file__).parent / "fixtures"


class FakeFetcher:
    def __init__(self, body: bytes) -> None:
        self.body = body
        self.urls: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        return self.body


class InMemoryIndex:
    def __init__(self, fail_on_call: int | None = None) -> None:
        self.documents: dict[str, IndexDocument] = {}
        self.calls: list[list[str]] = []
        self.fail_on_call = fail_on_call

    def put_multi(self, ids: list[str], documents: list[IndexDocument]) -> None:
        self.calls.append(list(ids))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise ConnectionError("index unavailable")
        for doc_id, document in zip(ids, documents):
            self.documents[doc_id] = document


def make_feed_items(count: int) -> list[dict[str, Any]]:
    start = datetime(2024, 3, 14, 0, 0, 0)
    return [
        {
            "id": f"tweet-{number}",
            "created_datetime": (start + timedelta(seconds=number)).strftime(
                "%Y/%m/%d %H:%M:%S"
            ),
            "user.screen_name": f"user{number % 7}",
            "text": f"post number {number}",
            "retweet_count": number % 5,
        }
        for number in range(count)
    ]


def make_records(count: int) -> list[Record]:
    start = datetime(2024, 3, 14, tzinfo=timezone.utc)
    return [
        Record(
            id=f"tweet-{number}",
            created_at=start + timedelta(seconds=number),
            user_name="alice",
            text=f"post number {number}",
            retweet_count=number,
        )
        for number in range(count)
    ]


@pytest.fixture
def sample_feed() -> bytes:
    return (FIXTURES / "tweets_sample.json").read_bytes()


@pytest.fixture
def make_feed():
    def _make(count: int) -> bytes:
        return json.dumps(make_feed_items(count)).encode("utf-8")

    return _make
