import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_recruiter
from app.database import get_db
from app.models.company import Company
from app.models.user import User
from app.schemas.company import CompanyListResponse, CompanyRegister, CompanyResponse, CompanyUpdate
from app.services.validation import validate_company_name

router = APIRouter(prefix="/api/v1/company", tags=["companies"])


@router.post("/register", response_model=CompanyResponse, status_code=201)
async def register_company(
    data: CompanyRegister,
    user: User = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    check = await validate_company_name(db, data.company_name)
    if not check.ok:
        raise HTTPException(status_code=check.status_code, detail=check.message)

    company = Company(name=data.company_name.strip(), owner_id=user.id)
    db.add(company)
    await db.flush()
    await db.refresh(company)
    return CompanyResponse.model_validate(company)


@router.get("/get", response_model=CompanyListResponse)
async def list_companies(user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Company).where(Company.owner_id == user.id).order_by(Company.created_at.desc())
    )
    companies = result.scalars().all()
    return CompanyListResponse(
        companies=[CompanyResponse.model_validate(c) for c in companies],
        total=len(companies),
    )


@router.get("/get/{company_id}", response_model=CompanyResponse)
async def get_company(company_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    company = await db.scalar(select(Company).where(Company.id == company_id))
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return CompanyResponse.model_validate(company)


@router.put("/update/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: uuid.UUID,
    data: CompanyUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    company = await db.scalar(select(Company).where(Company.id == company_id))
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    if company.owner_id != user.id:
        raise HTTPException(status_code=403, detail="You don't own this company")

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in update_data:
        check = await validate_company_name(db, update_data["name"], exclude_id=company.id)
        if not check.ok:
            raise HTTPException(status_code=check.status_code, detail=check.message)
        update_data["name"] = update_data["name"].strip()

    for field, value in update_data.items():
        setattr(company, field, value)

    await db.flush()
    await db.refresh(company)
    return CompanyResponse.model_validate(company)
