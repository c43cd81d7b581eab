import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, func as sa_func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_current_user
from app.api.serializers import application_to_response
from app.config import settings
from app.database import get_db
from app.models.application import Application, ApplicationStatus
from app.models.job import Job
from app.models.user import User
from app.schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    StatusUpdate,
    StatusUpdateResponse,
)
from app.services.status import can_transition, parse_status
from app.services.validation import validate_application_refs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/application", tags=["applications"])


async def _get_application(db: AsyncSession, app_id: uuid.UUID) -> Application:
    result = await db.execute(
        select(Application)
        .options(
            selectinload(Application.job).selectinload(Job.company),
            selectinload(Application.applicant),
        )
        .where(Application.id == app_id)
        .execution_options(populate_existing=True)
    )
    app = result.scalar_one_or_none()
    if not app:
        raise HTTPException(status_code=404, detail="Application not found")
    return app


@router.post("/apply/{job_id}", response_model=ApplicationResponse, status_code=201)
async def apply_for_job(
    job_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    check = await validate_application_refs(db, job_id, user.id)
    if not check.ok:
        logger.warning("Application by %s for job %s rejected: %s", user.id, job_id, check.message)
        raise HTTPException(status_code=check.status_code, detail=check.message)

    app = Application(job_id=job_id, applicant_id=user.id)
    db.add(app)
    await db.flush()
    await db.refresh(app)
    logger.info("User %s applied for job %s", user.id, job_id)
    return application_to_response(app)


@router.get("/get", response_model=ApplicationListResponse)
async def list_applied_jobs(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Application)
        .options(selectinload(Application.job).selectinload(Job.company))
        .where(Application.applicant_id == user.id)
        .order_by(Application.created_at.desc())
    )
    apps = result.scalars().all()
    return ApplicationListResponse(
        applications=[application_to_response(a) for a in apps],
        total=len(apps),
    )


@router.get("/{job_id}/applicants", response_model=ApplicationListResponse)
async def list_applicants(
    job_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    job = await db.scalar(select(Job).where(Job.id == job_id))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.created_by != user.id:
        raise HTTPException(status_code=403, detail="Only the job's recruiter can view applicants")

    result = await db.execute(
        select(Application)
        .options(selectinload(Application.applicant))
        .where(Application.job_id == job_id)
        .order_by(Application.created_at.desc())
    )
    apps = result.scalars().all()
    return ApplicationListResponse(
        applications=[application_to_response(a) for a in apps],
        total=len(apps),
    )


@router.get("/{app_id}", response_model=ApplicationResponse)
async def get_application(
    app_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    app = await _get_application(db, app_id)
    if user.id not in (app.applicant_id, app.job.created_by):
        raise HTTPException(status_code=403, detail="Not allowed to view this application")
    return application_to_response(app)


@router.post("/status/{app_id}/update", response_model=StatusUpdateResponse)
async def update_status(
    app_id: uuid.UUID,
    data: StatusUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    target = parse_status(data.status)
    if target is None:
        raise HTTPException(status_code=400, detail=f"Invalid status: {data.status}")

    app = await db.scalar(select(Application).where(Application.id == app_id))
    if not app:
        raise HTTPException(status_code=404, detail="Application not found")

    # Lock the job row so concurrent accepts can't both take the last opening
    job = await db.scalar(select(Job).where(Job.id == app.job_id).with_for_update())
    if job.created_by != user.id:
        raise HTTPException(status_code=403, detail="Only the job's recruiter can update applications")

    if not can_transition(app.status, target, settings.strict_status_transitions):
        raise HTTPException(status_code=409, detail=f"Cannot change status from {app.status} to {target}")

    if target == ApplicationStatus.ACCEPTED and app.status != ApplicationStatus.ACCEPTED:
        accepted = await db.scalar(
            select(sa_func.count())
            .select_from(Application)
            .where(Application.job_id == job.id, Application.status == ApplicationStatus.ACCEPTED)
        )
        if (accepted or 0) >= job.position:
            logger.warning("Job %s is full (%d/%d accepted)", job.id, accepted, job.position)
            raise HTTPException(status_code=409, detail="All positions for this job have been filled")

    if app.status != target:
        logger.info("Application %s status: %s -> %s", app.id, app.status, target)
        app.status = target
        await db.flush()

    app = await _get_application(db, app_id)
    return StatusUpdateResponse(
        success=True,
        message="Status updated successfully.",
        application=application_to_response(app),
    )


@router.delete("/{app_id}", status_code=204)
async def delete_application(
    app_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    app = await _get_application(db, app_id)
    if user.id not in (app.applicant_id, app.job.created_by):
        raise HTTPException(status_code=403, detail="Not allowed to delete this application")
    await db.delete(app)
    await db.commit()
