from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch, helpers

from tweet_batch.config import Settings
from tweet_batch.schema import IndexDocument


INDEX_MAPPING: dict[str, Any] = {
    "properties": {
        "ID": {"type": "keyword"},
        "CreatedAt": {"type": "date"},
        "UserName": {"type": "keyword"},
        "Text": {"type": "text"},
        "RetweetCount": {"type": "double"},
        "MediaURL": {"type": "keyword"},
    }
}

logger = logging.getLogger(__name__)


class ElasticsearchIndex:
    """Bulk upserts into a single Elasticsearch index.

    ``index`` bulk operations replace any document with the same ``_id``, so
    writing the same records twice leaves one document per identifier. The
    index is created with :data:`INDEX_MAPPING` before the first write.
    """

    def __init__(self, client: Elasticsearch, index_name: str = "tweets") -> None:
        self.client = client
        self.index_name = index_name
        self._ready = False

    @classmethod
    def from_settings(cls, settings: Settings) -> ElasticsearchIndex:
        basic_auth = None
        if settings.ELASTICSEARCH_USERNAME:
            basic_auth = (
                settings.ELASTICSEARCH_USERNAME,
                settings.ELASTICSEARCH_PASSWORD or "",
            )
        client = Elasticsearch(
            settings.elasticsearch_hosts,
            basic_auth=basic_auth,
            verify_certs=settings.ELASTICSEARCH_VERIFY_CERTS,
        )
        return cls(client, index_name=settings.INDEX_NAME)

    def ensure_index(self) -> None:
        if self._ready:
            return
        if not self.client.indices.exists(index=self.index_name):
            logger.info("creating index %s", self.index_name)
            self.client.indices.create(index=self.index_name, mappings=INDEX_MAPPING)
        self._ready = True

    def put_multi(self, ids: list[str], documents: list[IndexDocument]) -> None:
        if len(ids) != len(documents):
            raise ValueError(
                f"got {len(ids)} ids for {len(documents)} documents"
            )
        self.ensure_index()
        actions = [
            {
                "_op_type": "index",
                "_index": self.index_name,
                "_id": doc_id,
                "_source": document.model_dump(mode="json"),
            }
            for doc_id, document in zip(ids, documents)
        ]
        success_count, _ = helpers.bulk(self.client, actions, stats_only=True)
        logger.debug("indexed %d documents into %s", success_count, self.index_name)
