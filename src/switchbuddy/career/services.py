# src/switchbuddy/career/services.py

from __future__ import annotations

import logging

from ..core.errors import AuthenticationRequiredError, OracleError, RecordNotFoundError
from ..core.state import AppState
from ..llm import flows, schemas
from .career_models import MarketSearch, SavedInterviewPlan

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 30
DEFAULT_TOTAL_INTERVIEWS = 3


def continue_lesson(state: AppState, topic: str, message: str, intent: str | None = None) -> str:
    """
    Send one message in the lesson chat for `topic` and return the tutor's reply.

    The history is stored only after the model answered, so a failed call
    leaves the conversation as it was.
    """
    if not state.user_id:
        raise AuthenticationRequiredError()
    topic, message = topic.strip(), message.strip()
    if not topic or not message:
        raise ValueError("Both a topic and a message are required.")

    session = state.lesson_store.get_session(state.user_id, topic)
    history = list(session.history) if session else []
    history.append(schemas.ChatMessage(role="user", content=message))

    data = schemas.ChatLessonInput(topic=topic, history=history, intent=(intent or "").strip() or None)
    result = flows.run_flow(state.oracle, flows.CHAT_LESSON, data)

    history.append(schemas.ChatMessage(role="model", content=result.response))
    state.lesson_store.save_history(state.user_id, session.topic if session else topic, history)
    return result.response


def research_market(state: AppState, job_role: str, company_name: str, location: str) -> MarketSearch:
    """Market intelligence plus a salary benchmark, saved to the search history."""
    if not state.user_id:
        raise AuthenticationRequiredError()
    query = schemas.MarketIntelligenceInput(
        job_role=job_role.strip(), company_name=company_name.strip(), location=location.strip()
    )
    if not (query.job_role and query.company_name and query.location):
        raise ValueError("Role, company and location are all required.")

    intel = flows.run_flow(state.oracle, flows.MARKET_INTELLIGENCE, query)

    salary: schemas.SalaryEstimate | None
    try:
        salary = flows.run_flow(
            state.oracle,
            flows.SALARY_BENCHMARK,
            schemas.SalaryBenchmarkInput(job_role=query.job_role, location=query.location),
        )
    except OracleError as e:
        logger.warning("Salary benchmark unavailable for %r: %s", query.job_role, e)
        salary = None

    search_id = state.market_store.add_search(state.user_id, query=query, intel=intel, salary=salary)
    logger.info("Market search %s saved user=%s role=%r", search_id, state.user_id, query.job_role)
    return next(s for s in state.market_store.list_searches(state.user_id) if s.id == search_id)


def save_prepared_plan(state: AppState, details: schemas.JobDetails, plan: schemas.InterviewPlan) -> str:
    return state.plan_store.add_plan(
        state.user_id,
        topic=plan.topic,
        difficulty=plan.difficulty,
        questions=plan.questions,
        duration_minutes=plan.duration_minutes or DEFAULT_DURATION_MINUTES,
        total_interviews=plan.total_interviews or DEFAULT_TOTAL_INTERVIEWS,
        company=details.company,
        role=details.role,
    )


def record_mock_interview(state: AppState, plan_id: str) -> SavedInterviewPlan:
    """Count one finished mock interview and return the updated plan."""
    state.plan_store.record_completed(state.user_id, plan_id)
    plan = state.plan_store.get_plan(plan_id)
    if plan is None:
        raise RecordNotFoundError("interview plan", plan_id)
    return plan
