from datetime import datetime, timezone

from pydantic import BaseModel, Field


class HistoryEntry(BaseModel):
    id: str
    name: str = ""
    email: str = ""
    channel: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
