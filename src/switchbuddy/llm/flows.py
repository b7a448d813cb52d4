# src/switchbuddy/llm/flows.py

"""
AI flows: a prompt builder plus typed input/output models.

The oracle only sees a Flow and a validated input model; it is responsible for
getting a JSON object out of a model and validating it against flow.output_model.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

from ..core.errors import AuthenticationRequiredError, OracleError
from ..tracker.task_models import TaskKind
from . import schemas

if TYPE_CHECKING:
    from ..core.ports import Oracle
    from ..core.state import AppState

logger = logging.getLogger(__name__)

InT = TypeVar("InT", bound=BaseModel)
OutT = TypeVar("OutT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class Flow(Generic[InT, OutT]):
    name: str
    build_prompt: Callable[[InT], str]
    input_model: type[InT]
    output_model: type[OutT]


# ---- prompt builders ----


def build_daily_summary_prompt(data: schemas.DailySummaryInput) -> str:
    lines = "\n".join(f"- {t.title} (Completed: {str(t.completed).lower()})" for t in data.tasks)
    return f"""You are an encouraging and insightful productivity coach. Your goal is to help the user reflect on their day and prepare for the next one.

You will be given a list of tasks and their completion status for today.

Your tasks are to:
1. Write a short, motivational summary of the user's accomplishments. Focus on what they completed.
2. Based on the incomplete tasks, suggest the top 3 most important priorities for tomorrow.
3. For every incomplete task, suggest a time tomorrow to do it.

Today's Tasks:
{lines or "- (none)"}
"""


def build_daily_plan_prompt(data: schemas.DailyPlanInput) -> str:
    return f"""You are a no-nonsense AI mission commander. The user must switch to a better-paying job in under 60 days.

Generate a strict, full-day plan for {data.date} from 06:00 AM to 10:00 PM that merges:
1. Interview prep for one topic
2. Resume upgrades and targeted job applications
3. Current job essentials
4. Family commitments
5. A reward on weekends for completed weekly progress

Rules:
1. Every task must connect to the mission of getting a new job.
2. Avoid generic fluff; give specific commands.
3. Include 2 mission checkpoints (midday and evening) to review progress.
"""


def build_tailor_resume_prompt(data: schemas.ResumeJobInput) -> str:
    return f"""You are an expert resume editor. Analyze the user's resume and the job description, score the fit,
list the skills the job asks for that the resume lacks, and rewrite the resume to target the job.

Resume:
{data.resume}

Job Description:
{data.job_description}
"""


def build_parse_job_details_prompt(data: schemas.ResumeJobInput) -> str:
    return f"""You are an expert at parsing job-related documents. Analyze the provided resume and job description.

Extract:
1. company: the name of the company from the job description.
2. role: the specific job title from the job description.
3. tech_stack: the most important technologies and skills mentioned in BOTH the resume and the job description.

---
Resume:
{data.resume}
---
Job Description:
{data.job_description}
---
"""


def build_interview_plan_prompt(data: schemas.ResumeJobInput) -> str:
    return f"""You are an expert career coach and technical interviewer.

Create an interview practice plan from the resume and job description:
1. topic: a concise interview topic based on the core requirements of the job.
2. difficulty: 'Easy', 'Medium', or 'Hard' based on the seniority of the role.
3. questions: 5 challenging, open-ended questions that test skills from both documents.

---
Resume:
{data.resume}
---
Job Description:
{data.job_description}
---
"""


def build_topic_schedule_prompt(data: schemas.InterviewTopicScheduleInput) -> str:
    return f"""You are an expert technical interviewer and productivity coach.

Generate a day-by-day interview preparation schedule.
- topic: {data.topic}
- number_of_days: {data.number_of_days}
- start_date: {data.start_date}

Rules:
1. Create exactly {data.number_of_days} entries.
2. Each day covers ONE subtopic, from basics to advanced, without repeats.
3. Include theory and practical work (coding exercises, real-world scenarios).
4. Dates start at {data.start_date} and increase by 1 day per entry.
"""


def build_salary_estimate_prompt(data: schemas.SalaryEstimateInput) -> str:
    skills = ", ".join(data.skills) or "(not given)"
    return f"""You are an expert salary analyst for the tech industry in India.

Calculate a personalized salary range for:
- Job Role: {data.job_role}
- Years of Experience: {data.years_of_experience:g}
- Location: {data.location}
- Key Skills: {skills}

Provide a realistic salary range in Lakhs Per Annum (LPA) and a brief commentary on how the
experience and skills affect earning potential compared to the market average.
"""


def build_task_description_prompt(data: schemas.TaskDescriptionInput) -> str:
    return f"""Based on the following task title, generate a concise, one-sentence description that clarifies the task's objective.

Task Title: {data.title}
"""


def build_salary_benchmark_prompt(data: schemas.SalaryBenchmarkInput) -> str:
    return f"""You are a salary and compensation analyst.

Provide an estimated salary range for the job role "{data.job_role}" in "{data.location}",
and a brief commentary on the market conditions for this role in that location.
Present the salary in the local currency format (e.g. LPA for India).
"""


def build_market_intelligence_prompt(data: schemas.MarketIntelligenceInput) -> str:
    return f"""You are a world-class career analyst and job market expert for the tech industry in India.

Provide insights for the job role "{data.job_role}" at company "{data.company_name}" in location(s) "{data.location}".
Cover ALL of the following:
- growth_path: the typical career ladder, with a salary range in Lakhs Per Annum (LPA) for each level.
- skills_in_demand: the top 5-7 technical skills and tools for this role right now.
- location_comparison: compare the locations on salary and cost of living.
- top_companies_hiring: 3-5 other major companies hiring for this role in these locations.
- alumni_insights: typical tenure and 1-2 examples of common next moves.
- interview_prep: how hard the interviews are and 2-3 common question categories.
- application_strategy: the best time to apply and estimated success rates per application method (Referral, Direct Apply, ...).
"""


def build_company_insights_prompt(data: schemas.CompanyInsightsInput) -> str:
    return f"""You are a career analyst with deep knowledge of corporate cultures and hiring processes.

Give a brief, balanced summary of the culture, the interview process, and common pros and cons of working at: {data.company_name}.
Base it on publicly available information and general sentiment.
"""


def build_chat_lesson_prompt(data: schemas.ChatLessonInput) -> str:
    history = "\n".join(f"- {m.role}: {m.content}" for m in data.history)
    intent = f"\nAnswer style requested by the user: {data.intent}\n" if data.intent else ""
    return f"""You are an expert, friendly tutor explaining a technical concept, like a knowledgeable friend messaging on WhatsApp.

The conversation is about: "{data.topic}"
Reply to the user's last message at the end of the history and keep the conversation flowing.

Rules:
- Conversational and encouraging tone, simple language, a few emojis.
- Short paragraphs, like a series of chat messages.
- Answer direct questions directly.
- If the user is just starting, give a first friendly explanation of the topic with an analogy.
{intent}
Conversation History:
{history or "- user: Hi!"}
"""


DAILY_SUMMARY = Flow("daily_summary", build_daily_summary_prompt, schemas.DailySummaryInput, schemas.DailySummary)
DAILY_PLAN = Flow("daily_plan", build_daily_plan_prompt, schemas.DailyPlanInput, schemas.DailyPlan)
TAILOR_RESUME = Flow("tailor_resume", build_tailor_resume_prompt, schemas.ResumeJobInput, schemas.TailoredResume)
PARSE_JOB_DETAILS = Flow(
    "parse_job_details", build_parse_job_details_prompt, schemas.ResumeJobInput, schemas.JobDetails
)
INTERVIEW_PLAN = Flow("interview_plan", build_interview_plan_prompt, schemas.ResumeJobInput, schemas.InterviewPlan)
INTERVIEW_TOPIC_SCHEDULE = Flow(
    "interview_topic_schedule",
    build_topic_schedule_prompt,
    schemas.InterviewTopicScheduleInput,
    schemas.InterviewTopicSchedule,
)
SALARY_ESTIMATE = Flow(
    "salary_estimate", build_salary_estimate_prompt, schemas.SalaryEstimateInput, schemas.SalaryEstimate
)
TASK_DESCRIPTION = Flow(
    "task_description", build_task_description_prompt, schemas.TaskDescriptionInput, schemas.TaskDescription
)
SALARY_BENCHMARK = Flow(
    "salary_benchmark", build_salary_benchmark_prompt, schemas.SalaryBenchmarkInput, schemas.SalaryEstimate
)
MARKET_INTELLIGENCE = Flow(
    "market_intelligence",
    build_market_intelligence_prompt,
    schemas.MarketIntelligenceInput,
    schemas.MarketIntelligence,
)
COMPANY_INSIGHTS = Flow(
    "company_insights", build_company_insights_prompt, schemas.CompanyInsightsInput, schemas.CompanyInsights
)
CHAT_LESSON = Flow("chat_lesson", build_chat_lesson_prompt, schemas.ChatLessonInput, schemas.ChatLesson)

FLOWS: dict[str, Flow[Any, Any]] = {
    f.name: f
    for f in (
        DAILY_SUMMARY,
        DAILY_PLAN,
        TAILOR_RESUME,
        PARSE_JOB_DETAILS,
        INTERVIEW_PLAN,
        INTERVIEW_TOPIC_SCHEDULE,
        SALARY_ESTIMATE,
        TASK_DESCRIPTION,
        SALARY_BENCHMARK,
        MARKET_INTELLIGENCE,
        COMPANY_INSIGHTS,
        CHAT_LESSON,
    )
}


def run_flow(oracle: Oracle, flow: Flow[InT, OutT], data: InT | dict[str, Any]) -> OutT:
    """
    Validate input, invoke the oracle, and return its typed output.

    Raises pydantic.ValidationError for bad input and OracleError when the
    oracle produced nothing usable.
    """
    payload = data if isinstance(data, flow.input_model) else flow.input_model.model_validate(data)
    result = oracle.invoke(flow, payload)
    if result is None:
        logger.warning("Flow %s returned no result", flow.name)
        raise OracleError(f"AI flow '{flow.name}' returned no result.")
    return result


def prepare_interview(
    oracle: Oracle, resume: str, job_description: str
) -> tuple[schemas.JobDetails, schemas.InterviewPlan]:
    """Parse the job first, then build the practice plan for it."""
    data = schemas.ResumeJobInput(resume=resume, job_description=job_description)
    details = run_flow(oracle, PARSE_JOB_DETAILS, data)
    plan = run_flow(oracle, INTERVIEW_PLAN, data)
    return details, plan


def schedule_interview_topic(state: AppState, topic: str, number_of_days: int, start: date) -> list[str]:
    """
    Ask for a topic schedule and store each day as an interview task.

    Dates the model returns that don't parse fall back to start + index.
    Returns the new task ids.
    """
    if not state.user_id:
        raise AuthenticationRequiredError()

    data = schemas.InterviewTopicScheduleInput(
        topic=topic, number_of_days=number_of_days, start_date=start.isoformat()
    )
    result = run_flow(state.oracle, INTERVIEW_TOPIC_SCHEDULE, data)

    ids: list[str] = []
    for i, entry in enumerate(result.schedule[:number_of_days]):
        try:
            day = date.fromisoformat(entry.date)
        except ValueError:
            day = start + timedelta(days=i)
        ids.append(
            state.task_store.add_task(
                state.user_id,
                title=f"{entry.topic}: {entry.subtopic}",
                day=day,
                kind=TaskKind.INTERVIEW,
            )
        )
    logger.info("Scheduled %d interview tasks for topic=%r", len(ids), topic)
    return ids
