import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.core.exceptions import BadRequestError
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyResponse,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyDeleteResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Create a company.

    Authorization required: admin
    """
    company = company_crud.create(db, request.model_dump(by_alias=True))
    logger.info(f"Admin {admin_user['username']} created company {company['handle']}")
    return {"company": company}


@router.get("/", response_model=CompanyListResponse)
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees"),
    max_employees: Optional[int] = Query(None, alias="maxEmployees"),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Filters:
    - name: case-insensitive partial match
    - minEmployees / maxEmployees: inclusive bounds
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    filters = {
        key: value
        for key, value in (
            ("name", name),
            ("minEmployees", min_employees),
            ("maxEmployees", max_employees),
        )
        if value is not None
    }

    if not filters:
        return {"companies": company_crud.find_all(db)}
    return {"companies": company_crud.find_filtered(db, filters)}


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Partially update a company.

    Fields can be: name, description, numEmployees, logoUrl

    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    company = company_crud.update(db, handle, data)
    logger.info(f"Admin {admin_user['username']} updated company {handle}")
    return {"company": company}


@router.delete("/{handle}", response_model=CompanyDeleteResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Delete a company.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    logger.info(f"Admin {admin_user['username']} deleted company {handle}")
    return {"deleted": handle}
