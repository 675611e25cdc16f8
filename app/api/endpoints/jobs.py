import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobResponse,
    JobListResponse,
    JobDeleteResponse,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Create a job posting for an existing company.

    Authorization required: admin
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    logger.info(f"Admin {admin_user['username']} created job {job['id']}")
    return {"job": job}


@router.get("/", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary"),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Filters:
    - title: case-insensitive partial match
    - minSalary: inclusive lower bound
    - hasEquity: true limits to jobs with non-zero equity; false filters nothing
    """
    filters = {
        key: value
        for key, value in (
            ("title", title),
            ("minSalary", min_salary),
            ("hasEquity", has_equity),
        )
        if value is not None
    }

    if not filters:
        return {"jobs": job_crud.find_all(db)}
    return {"jobs": job_crud.find_filtered(db, filters)}


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Partially update a job.

    Fields can be: title, salary, equity

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True))
    logger.info(f"Admin {admin_user['username']} updated job {job_id}")
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    logger.info(f"Admin {admin_user['username']} deleted job {job_id}")
    return {"deleted": job_id}
