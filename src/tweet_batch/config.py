from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from tweet_batch.index.indexer import DEFAULT_CHUNK_SIZE
from tweet_batch.ingest.fetcher import FEED_URL_TEMPLATE


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "tweet-batch"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080
    LOG_LEVEL: str = "INFO"

    # Feed settings
    FEED_URL_TEMPLATE: str = FEED_URL_TEMPLATE
    FETCH_TIMEOUT_SECONDS: Optional[float] = None

    # Index settings
    INDEX_NAME: str = "tweets"
    CHUNK_SIZE: int = DEFAULT_CHUNK_SIZE
    ELASTICSEARCH_HOSTS: str = "http://localhost:9200"
    ELASTICSEARCH_USERNAME: Optional[str] = None
    ELASTICSEARCH_PASSWORD: Optional[str] = None
    ELASTICSEARCH_VERIFY_CERTS: bool = True

    model_config = SettingsConfigDict(
        env_prefix="TWEET_BATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def elasticsearch_hosts(self) -> list[str]:
        return [host.strip() for host in self.ELASTICSEARCH_HOSTS.split(",") if host.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
