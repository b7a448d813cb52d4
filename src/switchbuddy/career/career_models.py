# src/switchbuddy/career/career_models.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..llm.schemas import ChatMessage, MarketIntelligence, SalaryEstimate


@dataclass(slots=True, frozen=True)
class SavedInterviewPlan:
    """A mock-interview plan the user keeps working through."""

    id: str
    user_id: str
    topic: str
    difficulty: str
    questions: tuple[str, ...]
    duration_minutes: int
    total_interviews: int
    completed_interviews: int = 0
    company: str = ""
    role: str = ""
    created_at: float = 0.0

    @property
    def number_of_questions(self) -> int:
        return len(self.questions)

    @property
    def is_finished(self) -> bool:
        return self.completed_interviews >= self.total_interviews


@dataclass(slots=True, frozen=True)
class MarketSearch:
    """One market-intelligence lookup, kept for the search history."""

    id: str
    user_id: str
    job_role: str
    company_name: str
    location: str
    intel: MarketIntelligence
    salary: SalaryEstimate | None
    created_at: float


@dataclass(slots=True, frozen=True)
class LessonSession:
    """Chat lesson on one topic; history is oldest message first."""

    id: str
    user_id: str
    topic: str
    history: tuple[ChatMessage, ...] = field(default_factory=tuple)
    updated_at: float = 0.0

    @property
    def snippet(self) -> str:
        if not self.history:
            return f"Started a new chat about {self.topic}..."
        text = self.history[-1].content
        return text if len(text) <= 50 else text[:50] + "..."
