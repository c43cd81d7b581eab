from sqlalchemy import inspect

from app.models.application import Application
from app.models.job import Job
from app.models.user import User
from app.schemas.application import ApplicationResponse
from app.schemas.company import CompanyResponse
from app.schemas.job import ApplicationSummary, JobResponse
from app.schemas.user import ProfileResponse, UserResponse


def _columns(obj) -> dict:
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}


def _loaded(obj, name: str) -> bool:
    # Never trigger a lazy load from async code
    return name not in inspect(obj).unloaded


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        fullname=user.fullname,
        email=user.email,
        phone_number=user.phone_number,
        role=user.role,
        profile=ProfileResponse(
            bio=user.bio,
            skills=user.skills or [],
            resume=user.resume,
            resume_original_name=user.resume_original_name,
        ),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def job_to_response(job: Job) -> JobResponse:
    resp = JobResponse.model_validate(_columns(job))
    if _loaded(job, "company") and job.company:
        resp.company = CompanyResponse.model_validate(job.company)
    if _loaded(job, "applications"):
        resp.applications = [ApplicationSummary.model_validate(a) for a in job.applications]
    return resp


def application_to_response(app: Application) -> ApplicationResponse:
    resp = ApplicationResponse.model_validate(_columns(app))
    if _loaded(app, "job") and app.job:
        resp.job = job_to_response(app.job)
    if _loaded(app, "applicant") and app.applicant:
        resp.applicant = user_to_response(app.applicant)
    return resp
