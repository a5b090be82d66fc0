from __future__ import annotations

import logging
from typing import Iterable, Protocol

from tweet_batch.errors import IndexingError
from tweet_batch.index.batcher import chunks
from tweet_batch.schema import IndexDocument, Record


DEFAULT_CHUNK_SIZE = 200

logger = logging.getLogger(__name__)


class SearchIndex(Protocol):
    def put_multi(self, ids: list[str], documents: list[IndexDocument]) -> None:
        ...


def to_index_document(record: Record) -> IndexDocument:
    return IndexDocument(
        ID=record.id,
        CreatedAt=record.created_at,
        UserName=record.user_name,
        Text=record.text,
        RetweetCount=float(record.retweet_count),
        MediaURL=record.media_url if record.media_url is not None else "",
    )


def put_records(
    index: SearchIndex,
    records: Iterable[Record],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Upsert ``records`` chunk by chunk and return how many were written.

    The first failing chunk raises :class:`IndexingError`; later chunks are
    not attempted and earlier chunks stay written.
    """
    written = 0
    for number, chunk in enumerate(chunks(records, chunk_size), start=1):
        ids = [record.id for record in chunk]
        documents = [to_index_document(record) for record in chunk]
        try:
            index.put_multi(ids, documents)
        except Exception as exc:
            raise IndexingError(
                f"bulk upsert of chunk {number} ({len(ids)} documents) failed: {exc}"
            ) from exc
        written += len(ids)
        logger.debug("chunk %d upserted (%d documents)", number, len(ids))
    return written
