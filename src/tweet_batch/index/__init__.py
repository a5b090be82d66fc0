from tweet_batch.index.batcher import chunks
from tweet_batch.index.indexer import (
    DEFAULT_CHUNK_SIZE,
    SearchIndex,
    put_records,
    to_index_document,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "SearchIndex",
    "chunks",
    "put_records",
    "to_index_document",
]
