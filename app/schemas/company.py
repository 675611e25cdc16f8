from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from app.schemas.job import JobOut


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyUpdateRequest(BaseModel):
    """
    Schema for a partial company update.

    Only the fields present in the request body are changed. The handle
    cannot be changed, so unknown keys (handle included) are rejected.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: Optional[str]) -> str:
        """name and description may be changed but not cleared"""
        if v is None:
            raise ValueError("must not be null")
        return v


class CompanyOut(BaseModel):
    """Schema for company response"""
    model_config = ConfigDict(populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyDetailOut(CompanyOut):
    """Company plus its job postings"""
    jobs: List[JobOut] = []


class CompanyResponse(BaseModel):
    company: CompanyOut


class CompanyDetailResponse(BaseModel):
    company: CompanyDetailOut


class CompanyListResponse(BaseModel):
    companies: List[CompanyOut]


class CompanyDeleteResponse(BaseModel):
    deleted: str
