import uuid
from datetime import datetime

from pydantic import BaseModel

from app.schemas.job import JobResponse
from app.schemas.user import UserResponse


class ApplicationResponse(BaseModel):
    id: uuid.UUID
    job_id: uuid.UUID
    applicant_id: uuid.UUID
    status: str
    created_at: datetime
    updated_at: datetime
    job: JobResponse | None = None
    applicant: UserResponse | None = None


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationResponse]
    total: int


class StatusUpdate(BaseModel):
    status: str


class StatusUpdateResponse(BaseModel):
    success: bool
    message: str
    application: ApplicationResponse | None = None
