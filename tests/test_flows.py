# tests/test_flows.py

from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import httpx
import openai
import pydantic
import pytest

from switchbuddy.core.errors import AuthenticationRequiredError, OracleError
from switchbuddy.llm import flows, schemas
from switchbuddy.llm.client import OpenAICompatibleOracle, friendly_oracle_error_message
from switchbuddy.llm.offline import OfflineOracle
from switchbuddy.tracker.task_models import TaskKind

from .fakes import FakeOracle


def test_registry_covers_every_flow() -> None:
    assert set(flows.FLOWS) == {
        "daily_summary",
        "daily_plan",
        "tailor_resume",
        "parse_job_details",
        "interview_plan",
        "interview_topic_schedule",
        "salary_estimate",
        "task_description",
        "salary_benchmark",
        "market_intelligence",
        "company_insights",
        "chat_lesson",
    }


def test_run_flow_returns_typed_output() -> None:
    oracle = FakeOracle({"task_description": {"description": "Practice SQL window functions."}})

    out = flows.run_flow(oracle, flows.TASK_DESCRIPTION, {"title": "SQL"})

    assert isinstance(out, schemas.TaskDescription)
    assert out.description == "Practice SQL window functions."
    name, data = oracle.calls[0]
    assert name == "task_description"
    assert isinstance(data, schemas.TaskDescriptionInput)


def test_run_flow_raises_when_oracle_has_nothing() -> None:
    with pytest.raises(OracleError):
        flows.run_flow(FakeOracle(), flows.DAILY_PLAN, schemas.DailyPlanInput(date="2024-06-12"))


def test_run_flow_validates_input_before_calling_oracle() -> None:
    oracle = FakeOracle()
    with pytest.raises(pydantic.ValidationError):
        flows.run_flow(oracle, flows.INTERVIEW_TOPIC_SCHEDULE, {"topic": "SQL", "number_of_days": 0, "start_date": "x"})
    assert oracle.calls == []


def test_prepare_interview_parses_job_before_planning() -> None:
    oracle = FakeOracle(
        {
            "parse_job_details": {"company": "Acme", "role": "Backend Engineer", "tech_stack": ["Python", "SQL"]},
            "interview_plan": {"topic": "APIs", "difficulty": "Medium", "questions": ["Design a rate limiter."]},
        }
    )

    details, plan = flows.prepare_interview(oracle, "resume text", "jd text")

    assert [c[0] for c in oracle.calls] == ["parse_job_details", "interview_plan"]
    assert details.company == "Acme"
    assert plan.difficulty == "Medium"


def test_interview_plan_rejects_unknown_difficulty() -> None:
    with pytest.raises(pydantic.ValidationError):
        schemas.InterviewPlan.model_validate({"topic": "x", "difficulty": "Insane", "questions": ["q"]})


def test_schedule_interview_topic_creates_interview_tasks(state, oracle) -> None:
    oracle.responses["interview_topic_schedule"] = {
        "schedule": [
            {"date": "2024-06-12", "topic": "Python", "subtopic": "Generators"},
            {"date": "not-a-date", "topic": "Python", "subtopic": "Asyncio"},
            {"date": "2024-06-20", "topic": "Python", "subtopic": "Extra day"},
        ]
    }

    ids = flows.schedule_interview_topic(state, "Python", 2, date(2024, 6, 12))

    assert len(ids) == 2
    tasks = state.task_store.list_tasks("u1")
    assert [(t.date, t.title) for t in tasks] == [
        (date(2024, 6, 12), "Python: Generators"),
        (date(2024, 6, 13), "Python: Asyncio"),
    ]
    assert all(t.kind == TaskKind.INTERVIEW for t in tasks)


def test_schedule_interview_topic_requires_identity(state) -> None:
    state.user_id = ""
    with pytest.raises(AuthenticationRequiredError):
        flows.schedule_interview_topic(state, "Python", 2, date(2024, 6, 12))


def test_prompts_carry_their_inputs() -> None:
    prompt = flows.build_salary_estimate_prompt(
        schemas.SalaryEstimateInput(job_role="Data Engineer", years_of_experience=4, location="Pune", skills=["Spark"])
    )
    assert "Data Engineer" in prompt
    assert "Pune" in prompt
    assert "Spark" in prompt

    summary_prompt = flows.build_daily_summary_prompt(
        schemas.DailySummaryInput(tasks=[schemas.SummaryTask(title="Apply", completed=True)])
    )
    assert "- Apply (Completed: true)" in summary_prompt


# ---- OpenAI-compatible client ----


class _Completions:
    def __init__(self, replies: dict[str, object]) -> None:
        self.replies = replies
        self.models: list[str] = []

    def create(self, *, model, messages, response_format):
        self.models.append(model)
        reply = self.replies[model]
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


def _client(replies: dict[str, object]) -> tuple[SimpleNamespace, _Completions]:
    completions = _Completions(replies)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def _status_error(cls, status: int):
    request = httpx.Request("POST", "http://test/v1/chat/completions")
    return cls("err", response=httpx.Response(status, request=request), body=None)


def test_client_falls_back_on_invalid_output(settings) -> None:
    fake, completions = _client(
        {
            "model-a": '{"wrong": true}',
            "model-b": 'Sure! ```json\n{"description": "Write the cover letter."}\n```',
        }
    )
    oracle = OpenAICompatibleOracle(settings, client=fake)

    out = oracle.invoke(flows.TASK_DESCRIPTION, schemas.TaskDescriptionInput(title="Cover letter"))

    assert out is not None
    assert out.description == "Write the cover letter."
    assert completions.models == ["model-a", "model-b"]


def test_client_returns_none_when_every_model_fails(settings) -> None:
    fake, completions = _client({"model-a": _status_error(openai.NotFoundError, 404), "model-b": "not json"})
    oracle = OpenAICompatibleOracle(settings, client=fake)

    assert oracle.invoke(flows.TASK_DESCRIPTION, schemas.TaskDescriptionInput(title="x")) is None
    # the 404 model is parked, the next call goes straight to model-b
    oracle.invoke(flows.TASK_DESCRIPTION, schemas.TaskDescriptionInput(title="x"))
    assert completions.models == ["model-a", "model-b", "model-b"]


def test_client_fails_fast_on_auth_error(settings) -> None:
    fake, completions = _client({"model-a": _status_error(openai.AuthenticationError, 401), "model-b": "{}"})
    oracle = OpenAICompatibleOracle(settings, client=fake)

    with pytest.raises(OracleError):
        oracle.invoke(flows.TASK_DESCRIPTION, schemas.TaskDescriptionInput(title="x"))
    assert completions.models == ["model-a"]


def test_client_requires_api_key(settings) -> None:
    with pytest.raises(OracleError) as exc:
        OpenAICompatibleOracle(settings)
    assert "SB_LLM_API_KEY" in friendly_oracle_error_message(exc.value)


def test_offline_oracle_never_invents_output() -> None:
    with pytest.raises(OracleError):
        flows.run_flow(OfflineOracle(), flows.TASK_DESCRIPTION, {"title": "x"})
