"""
Database operations for companies.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import FilterClause, contains, select_columns, sql_for_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = select_columns({
    "handle": "handle",
    "name": "name",
    "description": "description",
    "num_employees": "numEmployees",
    "logo_url": "logoUrl",
})

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

FILTERS = (
    FilterClause("nameLike", "name ILIKE {param}", transform=contains),
    FilterClause("minEmployees", "num_employees >= {param}"),
    FilterClause("maxEmployees", "num_employees <= {param}"),
)


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If the handle or the name is already taken
    """
    duplicate = query(db, "SELECT handle FROM companies WHERE handle = $1", [data["handle"]])
    if duplicate:
        raise BadRequestError(f"Duplicate company: {data['handle']}")

    try:
        rows = query(
            db,
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_COLUMNS}""",
            [
                data["handle"],
                data["name"],
                data.get("description", ""),
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {data['name']}")

    logger.info(f"Created company {data['handle']}")
    return rows[0]


def find_all(
    db: Session,
    name_like: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Find companies, optionally filtered, ordered by name.

    Raises:
        BadRequestError: If min_employees > max_employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("Cannot set minEmployees to greater than maxEmployees")

    where = sql_for_filters(
        {"nameLike": name_like, "minEmployees": min_employees, "maxEmployees": max_employees},
        FILTERS,
    )
    return query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            {where.where_sql}
            ORDER BY name""",
        where.values,
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: If no such company
    """
    rows = query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            WHERE handle = $1""",
        [handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Args:
        data: Any of {name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If data is empty or the name belongs to another company
        NotFoundError: If no such company
    """
    set_clause = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = len(set_clause.values) + 1

    try:
        rows = query(
            db,
            f"""UPDATE companies
                SET {set_clause.set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {COMPANY_COLUMNS}""",
            [*set_clause.values, handle],
        )
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {data.get('name')}")

    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no such company
    """
    rows = query(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
