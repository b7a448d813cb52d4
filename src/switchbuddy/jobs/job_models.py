# src/switchbuddy/jobs/job_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class JobStage(StrEnum):
    """Kanban columns, in board order."""

    WISHLIST = "Wishlist"
    APPLYING = "Applying"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, raw: str) -> JobStage:
        """Case-insensitive lookup used by the console ("offer" -> Offer)."""
        key = (raw or "").strip().lower()
        for stage in cls:
            if stage.value.lower() == key:
                return stage
        raise ValueError(f"Unknown stage: {raw!r}. Use one of: {', '.join(s.value for s in cls)}")


@dataclass(slots=True, frozen=True)
class JobApplication:
    id: str
    user_id: str
    company: str
    title: str
    stage: JobStage
    logo_url: str | None = None
