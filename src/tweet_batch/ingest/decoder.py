from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from tweet_batch.errors import DecodeError, ParseError
from tweet_batch.ingest.dates import parse_created_datetime
from tweet_batch.schema import Record


def decode_records(payload: bytes | str) -> list[Record]:
    try:
        raw_items = json.loads(payload)
    except ValueError as exc:
        raise DecodeError(f"feed is not valid JSON: {exc}") from exc

    # A JSON null decodes to an empty feed.
    if raw_items is None:
        return []
    if not isinstance(raw_items, list):
        raise DecodeError(
            f"feed must be a JSON array, got {type(raw_items).__name__}"
        )

    records: list[Record] = []
    for position, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise DecodeError(
                f"feed item {position} must be an object, got {type(raw).__name__}"
            )
        try:
            normalized = _normalize_record(raw)
        except ParseError as exc:
            raise DecodeError(f"feed item {position}: {exc}") from exc
        try:
            records.append(Record(**normalized))
        except ValidationError as exc:
            raise DecodeError(f"feed item {position} is invalid: {exc}") from exc
    return records


def _normalize_record(raw: dict[str, Any]) -> dict[str, Any]:
    record_id = raw.get("id")
    retweet_count = raw.get("retweet_count")
    media_url = raw.get("media_urls")

    return {
        "id": _record_id(record_id),
        "created_at": parse_created_datetime(raw.get("created_datetime")),
        "user_name": raw.get("user.screen_name") or "",
        "text": raw.get("text") or "",
        "retweet_count": retweet_count if retweet_count is not None else 0,
        "media_url": media_url if media_url not in (None, "") else None,
    }


def _record_id(value: Any) -> Any:
    # Numeric ids are kept as text; anything else is left for validation.
    if value is None:
        return ""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value
