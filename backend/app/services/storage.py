import logging
import os
import uuid

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from app.config import settings

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


class ResumeRejected(ValueError):
    pass


def resume_dir() -> str:
    return os.path.join(settings.upload_dir, "resumes")


async def save_resume(user_id: uuid.UUID, file: UploadFile) -> tuple[str, str]:
    """Write an uploaded resume to disk.

    Returns (public URL, original filename). Raises ResumeRejected unless the
    upload has a .pdf name and PDF content, or when it is oversized.
    """
    original_name = os.path.basename(file.filename or "resume.pdf")
    if not original_name.lower().endswith(".pdf"):
        raise ResumeRejected("Resume must be a PDF file.")

    content = await file.read()
    if len(content) > settings.max_resume_bytes:
        raise ResumeRejected("Resume file is too large.")
    if not content.startswith(PDF_MAGIC):
        raise ResumeRejected("Resume must be a PDF file.")

    os.makedirs(resume_dir(), exist_ok=True)
    filename = f"resume_{user_id}_{uuid.uuid4().hex[:8]}.pdf"
    filepath = os.path.join(resume_dir(), filename)

    async with aiofiles.open(filepath, "wb") as f:
        await f.write(content)

    logger.info("Saved resume for user %s to %s", user_id, filepath)
    return f"/uploads/resumes/{filename}", original_name


async def discard_resume(url: str) -> None:
    """Remove a resume saved by save_resume, given its public URL."""
    filepath = os.path.join(resume_dir(), os.path.basename(url))
    try:
        await aiofiles.os.remove(filepath)
    except FileNotFoundError:
        return
    logger.info("Discarded resume %s", filepath)
