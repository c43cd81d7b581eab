from app.models.user import User, UserRole
from app.models.company import Company
from app.models.job import Job
from app.models.application import Application, ApplicationStatus

__all__ = [
    "User",
    "UserRole",
    "Company",
    "Job",
    "Application",
    "ApplicationStatus",
]
