import uuid
from datetime import datetime

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    requirements: Mapped[list] = mapped_column(JSONB, default=list)
    salary: Mapped[float] = mapped_column(Float, default=0.0)  # LPA
    location: Mapped[str] = mapped_column(String(255), default="")
    job_type: Mapped[str] = mapped_column(String(50), default="")  # Full Time, Part Time, Internship...
    experience_level: Mapped[int] = mapped_column(Integer, default=0)  # years
    position: Mapped[int] = mapped_column(Integer, default=1)  # number of openings
    company_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("companies.id"), nullable=False)
    created_by: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    company: Mapped["Company"] = relationship("Company", back_populates="jobs")
    applications: Mapped[list["Application"]] = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_jobs_created_at", "created_at"),
        Index("ix_jobs_company_id", "company_id"),
        Index("ix_jobs_created_by", "created_by"),
    )

    def __repr__(self) -> str:
        return f"<Job {self.title}>"
