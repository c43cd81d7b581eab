from datetime import datetime, timezone

from pydantic import BaseModel

from webui.api import JobBoardApi
from webui.routes import description_path
from webui.state import SavedJobs


class JobCard(BaseModel):
    """Summary of one job as shown in the listing grid."""

    job_id: str
    title: str
    description: str = ""
    company_name: str = ""
    company_logo: str = ""
    location: str = ""
    positions: int = 0
    job_type: str = ""
    salary: float = 0.0
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, job: dict) -> "JobCard":
        company = job.get("company") or {}
        return cls(
            job_id=str(job["id"]),
            title=job.get("title", ""),
            description=job.get("description", ""),
            company_name=company.get("name", ""),
            company_logo=company.get("logo", ""),
            location=job.get("location", ""),
            positions=job.get("position", 0),
            job_type=job.get("job_type", ""),
            salary=job.get("salary", 0.0),
            created_at=job.get("created_at"),
        )

    @property
    def positions_label(self) -> str:
        noun = "Position" if self.positions == 1 else "Positions"
        return f"{self.positions} {noun}"

    @property
    def salary_label(self) -> str:
        return f"{self.salary:g}LPA"

    def posted_label(self, now: datetime | None = None) -> str:
        if self.created_at is None:
            return ""
        now = now or datetime.now(timezone.utc)
        created = self.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        days = max((now - created).days, 0)
        if days == 0:
            return "Today"
        if days == 1:
            return "1 day ago"
        return f"{days} days ago"

    def details_path(self) -> str:
        return description_path(self.job_id)

    def save(self, saved: SavedJobs) -> bool:
        """Toggle "save for later". Returns True when the job is now saved."""
        return saved.toggle(self.job_id)


async def load_job_card(api: JobBoardApi, job_id: str) -> JobCard:
    """Fetch a job by id. Not-found arrives as ServerError(404)."""
    return JobCard.from_payload(await api.get_job(job_id))
