from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from tweet_batch.errors import ParseError


DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


def parse_created_datetime(value: Any) -> datetime:
    """Parse a feed timestamp such as ``2021/05/01 10:30:00``.

    Slashes are accepted in place of dashes and surrounding double quotes are
    dropped. The feed carries no offset, so the wall-clock value is read as UTC
    and the result is always timezone-aware.
    """
    try:
        normalized = value.replace("/", "-").strip('"')
        if not DATETIME_RE.fullmatch(normalized):
            raise ValueError(f"does not match layout {DATETIME_LAYOUT!r}")
        parsed = datetime.strptime(normalized, DATETIME_LAYOUT)
    except (AttributeError, ValueError) as exc:
        raise ParseError(f"cannot parse created_datetime {value!r}: {exc}") from exc
    return parsed.replace(tzinfo=timezone.utc)
