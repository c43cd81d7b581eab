import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.company import CompanyResponse
from app.services.skills import parse_skills


class JobCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    requirements: list[str] = []
    salary: float = Field(default=0.0, ge=0)
    location: str = ""
    job_type: str = ""
    experience_level: int = Field(default=0, ge=0)
    position: int = Field(default=1, ge=1)
    company_id: uuid.UUID

    @field_validator("requirements", mode="before")
    @classmethod
    def split_requirements(cls, value):
        # Accept the comma-separated form the posting form submits
        if isinstance(value, str):
            return parse_skills(value)
        return value


class ApplicationSummary(BaseModel):
    id: uuid.UUID
    applicant_id: uuid.UUID
    status: str

    model_config = {"from_attributes": True}


class JobResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    requirements: list[str]
    salary: float
    location: str
    job_type: str
    experience_level: int
    position: int
    company_id: uuid.UUID
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime
    company: CompanyResponse | None = None
    applications: list[ApplicationSummary] = []

    model_config = {"from_attributes": True}


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total: int
