from pydantic import BaseModel, ConfigDict, Field, field_validator
from decimal import Decimal
from typing import List, Optional


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1, description="Fraction of the company, 0 to 1")
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    id and companyHandle are immutable; any key outside
    {title, salary, equity} is rejected.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("title must not be null")
        return v


class JobOut(BaseModel):
    """Schema for job response"""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None  # fixed-point decimal text, e.g. "0.1"
    company_handle: str = Field(..., alias="companyHandle")


class JobResponse(BaseModel):
    job: JobOut


class JobListResponse(BaseModel):
    jobs: List[JobOut]


class JobDeleteResponse(BaseModel):
    deleted: int
