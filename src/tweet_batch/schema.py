from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Record(BaseModel):
    id: str = Field(min_length=1)
    created_at: datetime
    user_name: str = ""
    text: str = ""
    retweet_count: int = Field(default=0, strict=True, ge=INT64_MIN, le=INT64_MAX)
    media_url: str | None = None


class IndexDocument(BaseModel):
    ID: str
    CreatedAt: datetime
    UserName: str
    Text: str
    RetweetCount: float
    MediaURL: str = ""
