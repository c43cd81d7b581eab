"""Write-time checks run before anything is persisted.

Foreign keys alone don't give callers a useful answer, so every write path
asks one of these validators first and turns a failed result into an HTTP
error. Validators never raise for domain problems.
"""
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.application import Application
from app.models.company import Company
from app.models.job import Job
from app.models.user import User


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: str = ""
    status_code: int = 200

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str, status_code: int = 400) -> "ValidationResult":
        return cls(ok=False, message=message, status_code=status_code)


async def validate_application_refs(
    db: AsyncSession,
    job_id: uuid.UUID,
    applicant_id: uuid.UUID,
) -> ValidationResult:
    """An application must point at an existing job and an existing user, once."""
    job = await db.scalar(select(Job.id).where(Job.id == job_id))
    if job is None:
        return ValidationResult.failure("Job not found", 404)

    applicant = await db.scalar(select(User.id).where(User.id == applicant_id))
    if applicant is None:
        return ValidationResult.failure("Applicant not found", 404)

    existing = await db.scalar(
        select(Application.id).where(
            Application.job_id == job_id,
            Application.applicant_id == applicant_id,
        )
    )
    if existing is not None:
        return ValidationResult.failure("You have already applied for this job")

    return ValidationResult.success()


async def validate_job_refs(db: AsyncSession, company_id: uuid.UUID) -> ValidationResult:
    company = await db.scalar(select(Company.id).where(Company.id == company_id))
    if company is None:
        return ValidationResult.failure("Company not found", 404)
    return ValidationResult.success()


async def validate_company_name(
    db: AsyncSession,
    name: str,
    exclude_id: uuid.UUID | None = None,
) -> ValidationResult:
    name = name.strip()
    if not name:
        return ValidationResult.failure("Company name is required.")
    query = select(Company.id).where(Company.name == name)
    if exclude_id is not None:
        query = query.where(Company.id != exclude_id)
    if await db.scalar(query) is not None:
        return ValidationResult.failure("You can't register same company.")
    return ValidationResult.success()


async def validate_email_available(
    db: AsyncSession,
    email: str,
    exclude_id: uuid.UUID | None = None,
) -> ValidationResult:
    if "@" not in email:
        return ValidationResult.failure("A valid email is required.")
    query = select(User.id).where(User.email == email)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    if await db.scalar(query) is not None:
        return ValidationResult.failure("User already exists with this email.")
    return ValidationResult.success()
