import uuid
from datetime import datetime

from pydantic import BaseModel


class CompanyRegister(BaseModel):
    company_name: str


class CompanyUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    website: str | None = None
    location: str | None = None


class CompanyResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    website: str
    location: str
    logo: str
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CompanyListResponse(BaseModel):
    companies: list[CompanyResponse]
    total: int
