"""Shared fixtures.

API tests run against an in-process SQLite database. PostgreSQL-specific
column types (JSONB, UUID) are compiled as SQLite-compatible types via
SQLAlchemy @compiles hooks registered before any model imports.
"""

# Register PG→SQLite type compilers BEFORE any model imports
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.ext.compiler import compiles


@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_, compiler, **kw):
    return "TEXT"


@compiles(UUID, "sqlite")
def _compile_uuid_sqlite(type_, compiler, **kw):
    return "VARCHAR(36)"


import uuid  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.application import Application  # noqa: E402
from app.models.company import Company  # noqa: E402
from app.models.job import Job  # noqa: E402
from app.models.user import User, UserRole  # noqa: E402

# ---------------------------------------------------------------------------
# Test DB setup (async SQLite)
# ---------------------------------------------------------------------------

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(TEST_DB_URL, echo=False)
TestSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def _override_get_db():
    async with TestSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = _override_get_db

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def setup_db():
    """Create tables before the test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session(setup_db):
    async with TestSessionLocal() as session:
        yield session


@pytest_asyncio.fixture
async def client(setup_db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def auth(user: User) -> dict:
    return {"X-User-ID": str(user.id)}


async def create_user(db: AsyncSession, **kwargs) -> User:
    user = User(
        id=uuid.uuid4(),
        fullname=kwargs.get("fullname", "Jane Doe"),
        email=kwargs.get("email", f"{uuid.uuid4().hex[:8]}@example.com"),
        phone_number=kwargs.get("phone_number", "555-123-4567"),
        role=kwargs.get("role", UserRole.STUDENT),
        bio=kwargs.get("bio", ""),
        skills=kwargs.get("skills", []),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def create_job(db: AsyncSession, company: Company, recruiter: User, title: str = "Backend Engineer", **kwargs) -> Job:
    job = Job(
        id=uuid.uuid4(),
        title=title,
        description=kwargs.get("description", "Build APIs with Python and FastAPI."),
        requirements=kwargs.get("requirements", ["Python", "SQL"]),
        salary=kwargs.get("salary", 24.0),
        location=kwargs.get("location", "India"),
        job_type=kwargs.get("job_type", "Full Time"),
        experience_level=kwargs.get("experience_level", 2),
        position=kwargs.get("position", 12),
        company_id=company.id,
        created_by=recruiter.id,
    )
    db.add(job)
    await db.commit()
    await db.refresh(job)
    return job


@pytest_asyncio.fixture
async def student(db_session) -> User:
    return await create_user(
        db_session,
        fullname="Jane Doe",
        email="jane@example.com",
        bio="Backend developer",
        skills=["Python", "SQL"],
    )


@pytest_asyncio.fixture
async def recruiter(db_session) -> User:
    return await create_user(db_session, fullname="Rita Recruiter", email="rita@techcorp.com", role=UserRole.RECRUITER)


@pytest_asyncio.fixture
async def company(db_session, recruiter) -> Company:
    c = Company(id=uuid.uuid4(), name="TechCorp", location="Bangalore", owner_id=recruiter.id)
    db_session.add(c)
    await db_session.commit()
    await db_session.refresh(c)
    return c


@pytest_asyncio.fixture
async def job(db_session, company, recruiter) -> Job:
    return await create_job(db_session, company, recruiter)


@pytest_asyncio.fixture
async def application(db_session, job, student) -> Application:
    a = Application(id=uuid.uuid4(), job_id=job.id, applicant_id=student.id)
    db_session.add(a)
    await db_session.commit()
    await db_session.refresh(a)
    return a


@pytest.fixture
def sample_user_payload():
    return {
        "id": str(uuid.uuid4()),
        "fullname": "Jane Doe",
        "email": "jane@example.com",
        "phone_number": "555-123-4567",
        "role": "student",
        "profile": {
            "bio": "Backend developer",
            "skills": ["Python", "SQL"],
            "resume": "",
            "resume_original_name": "",
        },
        "created_at": "2026-10-01T10:00:00",
        "updated_at": "2026-10-01T10:00:00",
    }
