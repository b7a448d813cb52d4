# src/switchbuddy/llm/schemas.py

"""Request/response shapes for every AI flow. Field descriptions are sent to the model."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


# ---- daily tracker ----


class SummaryTask(BaseModel):
    title: str
    time: str = ""
    completed: bool = False


class DailySummaryInput(BaseModel):
    tasks: List[SummaryTask] = Field(description="Today's tasks, including their completion status.")


class MissedTask(BaseModel):
    title: str = Field(description="The title of the missed task.")
    rescheduled_time: str = Field(description="Suggested rescheduled time for tomorrow, e.g. 'Tomorrow 8AM'.")


class DailySummary(BaseModel):
    motivational_summary: str = Field(description="A short, encouraging summary of the user's accomplishments.")
    next_day_priorities: List[str] = Field(description="The top 3 recommended priority tasks for tomorrow.")
    completed_tasks: int = Field(ge=0, description="The number of tasks completed today.")
    total_tasks: int = Field(ge=0, description="The total number of tasks for today.")
    streak: int = Field(ge=0, description="Consecutive days with at least one completed task.")
    missed_tasks: List[MissedTask] = Field(
        default_factory=list,
        description="Incomplete tasks from today, with a suggested time for tomorrow.",
    )


class DailyPlanInput(BaseModel):
    date: str = Field(description="The day to plan, YYYY-MM-DD.")


class ScheduledItem(BaseModel):
    time: str = Field(description='The time for the task, e.g. "06:00 AM".')
    task: str = Field(description="The name or description of the task.")
    motivation: str = Field(description="A short motivational note for the task.")


class DailyPlan(BaseModel):
    optimized_schedule: List[ScheduledItem] = Field(
        description="An optimized, full-day schedule from 06:00 AM to 10:00 PM."
    )


class TaskDescriptionInput(BaseModel):
    title: str


class TaskDescription(BaseModel):
    description: str = Field(description="A short, one-sentence description for the task.")


class InterviewTopicScheduleInput(BaseModel):
    topic: str = Field(description='The interview topic, e.g. ".NET", "Angular", "Python".')
    number_of_days: int = Field(gt=0, description="How many days to schedule.")
    start_date: str = Field(description="The start date, YYYY-MM-DD.")


class InterviewPrepDay(BaseModel):
    date: str = Field(description="The date for the subtopic, YYYY-MM-DD.")
    topic: str
    subtopic: str = Field(description="One specific interview prep subtopic for that day.")


class InterviewTopicSchedule(BaseModel):
    schedule: List[InterviewPrepDay]


# ---- resume / interview prep ----


class ResumeJobInput(BaseModel):
    resume: str = Field(description="The user's resume as plain text.")
    job_description: str = Field(description="The job description as plain text.")


class FitBreakdown(BaseModel):
    skills_match: str
    experience_match: str
    education_match: str


class TailoredResume(BaseModel):
    fit_score: float = Field(ge=0, le=100, description="The percentage fit score.")
    breakdown: FitBreakdown
    missing_skills: List[str] = Field(default_factory=list)
    tailored_resume: str = Field(description="The full text of the tailored resume.")


class JobDetails(BaseModel):
    company: str
    role: str
    tech_stack: List[str] = Field(
        default_factory=list,
        description="Key skills present in both the resume and the job description.",
    )


class InterviewPlan(BaseModel):
    topic: str
    difficulty: Literal["Easy", "Medium", "Hard"]
    questions: List[str] = Field(min_length=1)
    duration_minutes: Optional[int] = Field(default=None, gt=0, description="Suggested length of one mock interview.")
    total_interviews: Optional[int] = Field(default=None, gt=0, description="Suggested number of mock interviews.")


# ---- market intelligence ----


class SalaryEstimateInput(BaseModel):
    job_role: str
    years_of_experience: float = Field(ge=0)
    location: str
    skills: List[str] = Field(default_factory=list)


class SalaryEstimate(BaseModel):
    salary_range: str = Field(description="Estimated salary range in Lakhs Per Annum (LPA).")
    commentary: str


class SalaryBenchmarkInput(BaseModel):
    job_role: str = Field(description='The job role, e.g. "Angular Developer".')
    location: str = Field(description='The city or region, e.g. "Bangalore".')


class MarketIntelligenceInput(BaseModel):
    job_role: str
    company_name: str
    location: str = Field(description='One or more locations, e.g. "Bangalore, Hyderabad".')


class CareerStep(BaseModel):
    role: str = Field(description="A role in the career path, e.g. 'Senior .NET Developer'.")
    salary_range: str = Field(description="Typical salary range for the role, e.g. '₹10–14 LPA'.")


class LocationComparison(BaseModel):
    commentary: str


class AlumniInsights(BaseModel):
    avg_tenure: str
    career_switches: List[str] = Field(default_factory=list)


class InterviewOutlook(BaseModel):
    difficulty_rating: str = Field(description='e.g. "Medium" or "7/10".')
    common_question_categories: List[str] = Field(default_factory=list)


class SuccessRate(BaseModel):
    method: str = Field(description='The application method, e.g. "Referral".')
    probability: str = Field(description='Estimated success probability, e.g. "70%".')


class ApplicationStrategy(BaseModel):
    best_time_to_apply: str
    success_rates: List[SuccessRate] = Field(default_factory=list)


class MarketIntelligence(BaseModel):
    growth_path: List[CareerStep] = Field(description="Career ladder with salary benchmarks per level.")
    skills_in_demand: List[str]
    location_comparison: LocationComparison
    top_companies_hiring: List[str] = Field(description="3-5 companies hiring for the role in these locations.")
    alumni_insights: AlumniInsights
    interview_prep: InterviewOutlook
    application_strategy: ApplicationStrategy


class CompanyInsightsInput(BaseModel):
    company_name: str


class CompanyInsights(BaseModel):
    culture: str = Field(description="A summary of the company's work culture.")
    interview_process: str
    pros: List[str] = Field(default_factory=list)
    cons: List[str] = Field(default_factory=list)


# ---- learning ----


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    content: str


class ChatLessonInput(BaseModel):
    topic: str
    history: List[ChatMessage] = Field(description="The conversation so far; the user's last message is at the end.")
    intent: Optional[str] = Field(
        default=None,
        description="How to answer, e.g. 'Explain for an interview' or 'Translate to Hindi'.",
    )


class ChatLesson(BaseModel):
    response: str = Field(description="The tutor's reply that continues the conversation.")
