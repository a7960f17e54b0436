"""
Company endpoints.

Anyone may read companies; creating, changing and deleting them is for admins.
"""

import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin
from app.core.validation import validate
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDeleted,
    CompanyDetailResult,
    CompanyList,
    CompanyResult,
    CompanySearchQuery,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


def company_search_query(request: Request) -> CompanySearchQuery:
    """Validate the query string; unknown filters are rejected with 400."""
    return validate(dict(request.query_params), CompanySearchQuery)


@router.post("", status_code=201, response_model=CompanyResult, dependencies=[Depends(require_admin)])
def create_company(request: CompanyCreateRequest, db: Session = Depends(get_db)):
    """
    Create a company.

    Returns { company: { handle, name, description, numEmployees, logoUrl } }

    Authorization required: admin
    """
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyList)
def list_companies(
    filters: CompanySearchQuery = Depends(company_search_query),
    db: Session = Depends(get_db),
):
    """
    List companies ordered by name.

    Optional filters:
    - nameLike: case-insensitive partial match on name
    - minEmployees / maxEmployees: inclusive bounds on numEmployees

    Authorization required: none
    """
    companies = company_crud.find_all(
        db,
        name_like=filters.name_like,
        min_employees=filters.min_employees,
        max_employees=filters.max_employees,
    )
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailResult)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company and its jobs.

    Authorization required: none
    """
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyResult, dependencies=[Depends(require_admin)])
def update_company(handle: str, request: CompanyUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a company.

    Fields can be: { name, description, numEmployees, logoUrl }

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request.model_dump(exclude_unset=True, by_alias=True))
    return {"company": company}


@router.delete("/{handle}", response_model=CompanyDeleted, dependencies=[Depends(require_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
