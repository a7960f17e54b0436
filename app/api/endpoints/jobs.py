import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin
from app.core.validation import validate
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobDeleted,
    JobList,
    JobResult,
    JobSearchQuery,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


def job_search_query(request: Request) -> JobSearchQuery:
    """Validate the query string; unknown filters are rejected with 400."""
    return validate(dict(request.query_params), JobSearchQuery)


@router.post("", status_code=201, response_model=JobResult, dependencies=[Depends(require_admin)])
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a job.

    Returns { job: { id, title, salary, equity, companyHandle } }

    Authorization required: admin
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("", response_model=JobList)
def list_jobs(
    filters: JobSearchQuery = Depends(job_search_query),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by id.

    Optional filters:
    - title: case-insensitive partial match
    - minSalary: salary at least this much
    - hasEquity: if true, only jobs with equity > 0; false is ignored

    Authorization required: none
    """
    jobs = job_crud.find_all(
        db,
        title=filters.title,
        min_salary=filters.min_salary,
        has_equity=filters.has_equity,
    )
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobResult)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job by id.

    Authorization required: none
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobResult, dependencies=[Depends(require_admin)])
def update_job(job_id: int, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a job.

    Fields can be: { title, salary, equity }

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True, by_alias=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeleted, dependencies=[Depends(require_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": str(job_id)}
