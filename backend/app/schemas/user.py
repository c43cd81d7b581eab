import uuid
from datetime import datetime

from pydantic import BaseModel

from app.models.user import UserRole


class UserRegister(BaseModel):
    fullname: str
    email: str
    phone_number: str = ""
    role: UserRole = UserRole.STUDENT


class ProfileResponse(BaseModel):
    bio: str = ""
    skills: list[str] = []
    resume: str = ""
    resume_original_name: str = ""


class UserResponse(BaseModel):
    id: uuid.UUID
    fullname: str
    email: str
    phone_number: str
    role: str
    profile: ProfileResponse
    created_at: datetime
    updated_at: datetime


class UserEnvelope(BaseModel):
    success: bool
    message: str
    user: UserResponse | None = None
