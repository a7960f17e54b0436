from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from decimal import Decimal


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., alias="companyHandle", min_length=1, max_length=25)


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    id and companyHandle cannot be changed. salary and equity may be set to null.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("title cannot be null")
        return v


class JobSearchQuery(BaseModel):
    """Query string filters for GET /jobs"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: Optional[str] = Field(None, min_length=1, description="Case-insensitive partial match")
    min_salary: Optional[int] = Field(None, alias="minSalary", ge=0)
    has_equity: Optional[bool] = Field(None, alias="hasEquity", description="Only true filters")


class JobResponse(BaseModel):
    """Schema for job response"""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str = Field(..., alias="companyHandle")


class CompanyJobResponse(BaseModel):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None


class JobResult(BaseModel):
    job: JobResponse


class JobList(BaseModel):
    jobs: List[JobResponse]


class JobDeleted(BaseModel):
    deleted: str
