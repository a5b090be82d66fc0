from __future__ import annotations

from datetime import datetime, timezone

import typer
import uvicorn

from tweet_batch.config import get_settings
from tweet_batch.errors import BatchError, describe
from tweet_batch.index.elastic import ElasticsearchIndex
from tweet_batch.ingest.fetcher import RequestsFetcher
from tweet_batch.logging_utils import setup_logging
from tweet_batch.pipeline import ImportJob
from tweet_batch.server import build_default_app

app = typer.Typer(help="Daily tweet feed import tools.")


@app.command("serve")
def serve_command(
    host: str | None = typer.Option(None, "--host", help="Bind address."),
    port: int | None = typer.Option(None, "--port", help="Bind port."),
) -> None:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    uvicorn.run(
        build_default_app(settings),
        host=host or settings.API_HOST,
        port=port or settings.API_PORT,
        log_config=None,
    )


@app.command("import-tweets")
def import_tweets_command(
    now: str | None = typer.Option(
        None, "--now", help="ISO timestamp to use as the processing time."
    ),
) -> None:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    processing_time = None
    if now is not None:
        try:
            processing_time = datetime.fromisoformat(now)
        except ValueError as exc:
            raise typer.BadParameter(
                f"expected an ISO timestamp, got {now!r}", param_hint="--now"
            ) from exc
        if processing_time.tzinfo is None:
            processing_time = processing_time.replace(tzinfo=timezone.utc)

    job = ImportJob(
        RequestsFetcher(timeout=settings.FETCH_TIMEOUT_SECONDS),
        ElasticsearchIndex.from_settings(settings),
        chunk_size=settings.CHUNK_SIZE,
        url_template=settings.FEED_URL_TEMPLATE,
        now=processing_time,
    )
    try:
        result = job.run()
    except BatchError as exc:
        typer.echo(f"error: {describe(exc)}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"url={result.url} fetched={result.fetched} indexed={result.indexed}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
