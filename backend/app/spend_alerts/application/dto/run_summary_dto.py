"""Data Transfer Object summarising one alert job run.

Celery tasks return the dumped summary, so it has to stay JSON
serializable.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class RunSummary(BaseModel):
    """Counters aggregated over one evaluation run.

    `attempted` counts dispatch attempts, so `attempted == sent + failed`
    for crossings. Per-user errors that happen before a dispatch is
    attempted (store errors, unexpected exceptions) also count as failed
    and are listed in `errors`.
    """

    job: str = Field(description="Name of the alert job")
    attempted: int = Field(default=0, ge=0, description="Dispatch attempts")
    sent: int = Field(default=0, ge=0, description="Notifications delivered and recorded")
    failed: int = Field(default=0, ge=0, description="Failed dispatches or per-user errors")
    skipped: int = Field(
        default=0,
        ge=0,
        description="Users or entities skipped (no device token, malformed data)",
    )
    race_lost: int = Field(
        default=0,
        ge=0,
        description="Crossings already claimed by a concurrent run",
    )
    errors: list[str] = Field(default_factory=list, description="Error messages")
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = Field(default=None)

    def record_error(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)

    def finish(self) -> "RunSummary":
        self.finished_at = datetime.now(timezone.utc)
        return self
