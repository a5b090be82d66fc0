"""HTTP trigger for the daily import.

The scheduler calls ``GET /batch/import-tweets``. The response is an empty 200
on success, or a 500 whose plain-text body is the error message.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from tweet_batch.config import Settings, get_settings
from tweet_batch.errors import BatchError, describe
from tweet_batch.index.elastic import ElasticsearchIndex
from tweet_batch.index.indexer import SearchIndex
from tweet_batch.ingest.fetcher import FeedFetcher, RequestsFetcher
from tweet_batch.pipeline import ImportJob


REQUEST_ID_HEADER = "X-Request-ID"

logger = logging.getLogger(__name__)


async def request_context_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    client = request.headers.get("X-Forwarded-For") or (
        request.client.host if request.client else "-"
    )
    request.state.request_id = request_id
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "unhandled error on %s %s request_id=%s",
            request.method,
            request.url.path,
            request_id,
        )
        response = PlainTextResponse("Internal Server Error", status_code=500)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "%s %s %d %.1fms client=%s request_id=%s",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        client,
        request_id,
    )
    return response


def create_app(
    fetcher: FeedFetcher, index: SearchIndex, settings: Settings | None = None
) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(title=settings.APP_NAME, docs_url=None, redoc_url=None)
    app.middleware("http")(request_context_middleware)

    @app.get("/batch/import-tweets", response_class=PlainTextResponse)
    def import_tweets_endpoint(request: Request) -> PlainTextResponse:
        job = ImportJob(
            fetcher,
            index,
            chunk_size=settings.CHUNK_SIZE,
            url_template=settings.FEED_URL_TEMPLATE,
        )
        try:
            job.run()
        except BatchError as exc:
            logger.error(
                "import failed request_id=%s: %s",
                request.state.request_id,
                describe(exc),
                exc_info=exc,
            )
            return PlainTextResponse(str(exc), status_code=500)
        return PlainTextResponse("", status_code=200)

    return app


def build_default_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()
    fetcher = RequestsFetcher(timeout=settings.FETCH_TIMEOUT_SECONDS)
    index = ElasticsearchIndex.from_settings(settings)
    return create_app(fetcher, index, settings)
