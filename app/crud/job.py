"""
Database operations for jobs.

Plain functions over a Session; every query is parameterized SQL run through
app.core.database.query. Rows come back keyed by their API (camelCase) names.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import FilterClause, contains, is_true, select_columns, sql_for_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = select_columns({
    "id": "id",
    "title": "title",
    "salary": "salary",
    "equity": "equity",
    "company_handle": "companyHandle",
})

# API name -> column name for partial updates
JS_TO_SQL = {"companyHandle": "company_handle"}

# Search filters, in the order their clauses appear in the WHERE
FILTERS = (
    FilterClause("title", "title ILIKE {param}", transform=contains),
    FilterClause("minSalary", "salary >= {param}"),
    FilterClause("hasEquity", "equity > 0", is_active=is_true),
)


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: If the company does not exist
    """
    try:
        rows = query(
            db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_COLUMNS}""",
            [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"No company: {data['companyHandle']}")

    job = rows[0]
    logger.info(f"Created job {job['id']}: {job['title']} ({job['companyHandle']})")
    return job


def filter_sql(
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
):
    """
    WHERE clause for a job search.

    title matches case-insensitively anywhere in the title; hasEquity only
    filters when it is True.
    """
    return sql_for_filters(
        {"title": title, "minSalary": min_salary, "hasEquity": has_equity},
        FILTERS,
    )


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> List[Dict[str, Any]]:
    """
    Find jobs, optionally filtered, ordered by id.

    Returns:
        [{id, title, salary, equity, companyHandle}, ...]
    """
    where = filter_sql(title=title, min_salary=min_salary, has_equity=has_equity)
    return query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            {where.where_sql}
            ORDER BY id""",
        where.values,
    )


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Get a job by id.

    Raises:
        NotFoundError: If no such job
    """
    rows = query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            WHERE id = $1""",
        [job_id],
    )
    if not rows:
        raise NotFoundError(f"No job with id: {job_id}")
    return rows[0]


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the fields present in data change.

    Args:
        db: Database session
        job_id: Job to update
        data: Any of {title, salary, equity}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no such job
    """
    set_clause = sql_for_partial_update(data, JS_TO_SQL)
    id_idx = len(set_clause.values) + 1

    rows = query(
        db,
        f"""UPDATE jobs
            SET {set_clause.set_cols}
            WHERE id = ${id_idx}
            RETURNING {JOB_COLUMNS}""",
        [*set_clause.values, job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job with id: {job_id}")

    db.commit()
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no such job
    """
    rows = query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job with id: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
