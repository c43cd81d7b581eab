import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.api.serializers import user_to_response
from app.database import get_db
from app.models.user import User
from app.schemas.user import UserEnvelope, UserRegister, UserResponse
from app.services.skills import normalize_skills
from app.services.storage import ResumeRejected, discard_resume, save_resume
from app.services.validation import validate_email_available

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/user", tags=["users"])


@router.post("/register", response_model=UserEnvelope, status_code=201)
async def register(data: UserRegister, db: AsyncSession = Depends(get_db)):
    email = data.email.strip().lower()
    check = await validate_email_available(db, email)
    if not check.ok:
        raise HTTPException(status_code=check.status_code, detail=check.message)

    user = User(
        fullname=data.fullname.strip(),
        email=email,
        phone_number=data.phone_number.strip(),
        role=data.role,
        skills=[],
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Registered %s user %s", user.role, user.id)
    return UserEnvelope(success=True, message="Account created successfully.", user=user_to_response(user))


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    return user_to_response(user)


@router.post("/profile/update", response_model=UserEnvelope)
async def update_profile(
    fullname: str = Form(""),
    email: str = Form(""),
    phoneNumber: str = Form(""),
    bio: str = Form(""),
    skills: list[str] = Form([]),
    file: UploadFile | None = File(None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    # Blank fields keep the stored value
    if fullname.strip():
        user.fullname = fullname.strip()
    if email.strip():
        new_email = email.strip().lower()
        if new_email != user.email:
            check = await validate_email_available(db, new_email, exclude_id=user.id)
            if not check.ok:
                raise HTTPException(status_code=check.status_code, detail=check.message)
            user.email = new_email
    if phoneNumber.strip():
        user.phone_number = phoneNumber.strip()
    if bio.strip():
        user.bio = bio.strip()

    parsed_skills = normalize_skills(skills)
    if parsed_skills:
        user.skills = parsed_skills

    saved_resume = None
    if file is not None and file.filename:
        try:
            user.resume, user.resume_original_name = await save_resume(user.id, file)
        except ResumeRejected as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        saved_resume = user.resume

    try:
        await db.flush()
    except Exception:
        if saved_resume:
            await discard_resume(saved_resume)
        raise
    await db.refresh(user)
    logger.info("Updated profile for user %s", user.id)
    return UserEnvelope(success=True, message="Profile updated successfully.", user=user_to_response(user))
