import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_current_user, require_recruiter
from app.api.serializers import job_to_response
from app.database import get_db
from app.models.job import Job
from app.models.user import User
from app.schemas.job import JobCreate, JobListResponse, JobResponse
from app.services.validation import validate_job_refs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/job", tags=["jobs"])


def _build_job_query(keyword: str | None = None, created_by: uuid.UUID | None = None) -> Select:
    query = select(Job).options(selectinload(Job.company))

    if keyword:
        term = keyword.strip()
        query = query.where(
            or_(
                Job.title.icontains(term, autoescape=True),
                Job.description.icontains(term, autoescape=True),
            )
        )

    if created_by:
        query = query.where(Job.created_by == created_by)

    return query.order_by(Job.created_at.desc())


@router.post("/post", response_model=JobResponse, status_code=201)
async def post_job(
    data: JobCreate,
    user: User = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    check = await validate_job_refs(db, data.company_id)
    if not check.ok:
        raise HTTPException(status_code=check.status_code, detail=check.message)

    job = Job(created_by=user.id, **data.model_dump())
    db.add(job)
    await db.flush()
    await db.refresh(job)
    await db.refresh(job, attribute_names=["company"])
    logger.info("Job %s posted by %s", job.id, user.id)
    return job_to_response(job)


@router.get("/get", response_model=JobListResponse)
async def list_jobs(keyword: str | None = None, db: AsyncSession = Depends(get_db)):
    result = await db.execute(_build_job_query(keyword=keyword))
    jobs = result.scalars().all()
    return JobListResponse(jobs=[job_to_response(j) for j in jobs], total=len(jobs))


@router.get("/getadminjobs", response_model=JobListResponse)
async def list_admin_jobs(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    result = await db.execute(_build_job_query(created_by=user.id))
    jobs = result.scalars().all()
    return JobListResponse(jobs=[job_to_response(j) for j in jobs], total=len(jobs))


@router.get("/get/{job_id}", response_model=JobResponse)
async def get_job(job_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Job)
        .options(selectinload(Job.company), selectinload(Job.applications))
        .where(Job.id == job_id)
    )
    job = result.scalar_one_or_none()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job_to_response(job)
