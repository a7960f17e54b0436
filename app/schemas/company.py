"""
Pydantic schemas for companies.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from urllib.parse import urlparse

from app.schemas.job import CompanyJobResponse


def _check_url(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("logoUrl must be an http(s) URL")
    return v


class CompanyCreateRequest(BaseModel):
    """Schema for creating a company"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str = ""
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("logo_url")
    @classmethod
    def check_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v)


class CompanyUpdateRequest(BaseModel):
    """Schema for a partial company update; the handle cannot change."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("logo_url")
    @classmethod
    def check_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_url(v)

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("cannot be null")
        return v


class CompanySearchQuery(BaseModel):
    """Query string filters for GET /companies"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name_like: Optional[str] = Field(None, alias="nameLike", min_length=1)
    min_employees: Optional[int] = Field(None, alias="minEmployees", ge=0)
    max_employees: Optional[int] = Field(None, alias="maxEmployees", ge=0)


class CompanyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyDetailResponse(CompanyResponse):
    """Company with its jobs"""
    jobs: List[CompanyJobResponse] = []


class CompanyResult(BaseModel):
    company: CompanyResponse


class CompanyDetailResult(BaseModel):
    company: CompanyDetailResponse


class CompanyList(BaseModel):
    companies: List[CompanyResponse]


class CompanyDeleted(BaseModel):
    deleted: str
