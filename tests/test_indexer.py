from __future__ import annotations

from datetime import datetime, timezone

import pytest

from tweet_batch.errors import IndexingError
from tweet_batch.index.indexer import put_records, to_index_document
from tweet_batch.schema import Record

from conftest import InMemoryIndex, make_records


def test_index_document_projection() -> None:
    record = Record(
        id="1",
        created_at=datetime(2021, 5, 1, 10, 30, tzinfo=timezone.utc),
        user_name="alice",
        text="hello",
        retweet_count=7,
        media_url="https://pbs.twimg.com/media/abc.jpg",
    )

    document = to_index_document(record)

    assert document.ID == "1"
    assert document.CreatedAt == record.created_at
    assert document.UserName == "alice"
    assert document.Text == "hello"
    assert document.RetweetCount == 7.0
    assert isinstance(document.RetweetCount, float)
    assert document.MediaURL == "https://pbs.twimg.com/media/abc.jpg"


def test_missing_media_url_becomes_empty_string() -> None:
    record = make_records(1)[0]
    assert record.media_url is None

    dumped = to_index_document(record).model_dump(mode="json")

    assert dumped["MediaURL"] == ""


def test_put_records_writes_chunks_in_order() -> None:
    index = InMemoryIndex()
    records = make_records(450)

    written = put_records(index, records, chunk_size=200)

    assert written == 450
    assert [len(call) for call in index.calls] == [200, 200, 50]
    assert [doc_id for call in index.calls for doc_id in call] == [r.id for r in records]
    assert len(index.documents) == 450


def test_put_records_with_no_records_makes_no_calls() -> None:
    index = InMemoryIndex()
    assert put_records(index, []) == 0
    assert index.calls == []


def test_failing_chunk_stops_remaining_chunks() -> None:
    index = InMemoryIndex(fail_on_call=2)
    records = make_records(450)

    with pytest.raises(IndexingError) as excinfo:
        put_records(index, records, chunk_size=200)

    assert len(index.calls) == 2
    assert index.calls[0] == [r.id for r in records[:200]]
    assert index.calls[1] == [r.id for r in records[200:400]]
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert "chunk 2" in str(excinfo.value)
    # chunk 1 stays written
    assert set(index.documents) == {r.id for r in records[:200]}


def test_duplicate_ids_keep_last_write() -> None:
    index = InMemoryIndex()
    first, second = make_records(2)
    duplicate = second.model_copy(update={"id": first.id, "text": "newer"})

    put_records(index, [first, duplicate], chunk_size=1)

    assert list(index.documents) == [first.id]
    assert index.documents[first.id].Text == "newer"
