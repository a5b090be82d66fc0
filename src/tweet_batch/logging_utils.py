from __future__ import annotations

import logging


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
    # The access log line comes from tweet_batch.server.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
