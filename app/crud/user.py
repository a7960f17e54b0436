"""
Database operations for users and job applications.

Passwords are stored as bcrypt hashes and never returned.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from app.core.database import query
from app.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import select_columns, sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = select_columns({
    "username": "username",
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "is_admin": "isAdmin",
})

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
}


def _as_user(row: Dict[str, Any]) -> Dict[str, Any]:
    # SQLite returns booleans as 0/1
    row["isAdmin"] = bool(row["isAdmin"])
    return row


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        UnauthorizedError: If the user is missing or the password is wrong
    """
    rows = query(
        db,
        f"""SELECT {USER_COLUMNS}, password
            FROM users
            WHERE username = $1""",
        [username],
    )
    if rows:
        user = rows[0]
        hashed = user.pop("password")
        if verify_password(password, hashed):
            return _as_user(user)

    logger.info(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Args:
        data: {username, password, firstName, lastName, email, isAdmin}

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        BadRequestError: On duplicate username
    """
    duplicate = query(db, "SELECT username FROM users WHERE username = $1", [data["username"]])
    if duplicate:
        raise BadRequestError(f"Duplicate username: {data['username']}")

    rows = query(
        db,
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            data["username"],
            get_password_hash(data["password"]),
            data["firstName"],
            data["lastName"],
            data["email"],
            bool(data.get("isAdmin", False)),
        ],
    )
    db.commit()

    logger.info(f"Registered user {data['username']}")
    return _as_user(rows[0])


def find_all(db: Session) -> List[Dict[str, Any]]:
    """All users, ordered by username."""
    rows = query(
        db,
        f"""SELECT {USER_COLUMNS}
            FROM users
            ORDER BY username""",
    )
    return [_as_user(row) for row in rows]


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Get a user with the ids of jobs they applied to.

    Returns:
        {username, firstName, lastName, email, isAdmin, jobs}

    Raises:
        NotFoundError: If no such user
    """
    rows = query(
        db,
        f"""SELECT {USER_COLUMNS}
            FROM users
            WHERE username = $1""",
        [username],
    )
    if not rows:
        raise NotFoundError(f"No user: {username}")

    user = _as_user(rows[0])
    applications = query(
        db,
        """SELECT job_id
           FROM applications
           WHERE username = $1
           ORDER BY job_id""",
        [username],
    )
    user["jobs"] = [a["job_id"] for a in applications]
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user. A new password is hashed before it is stored.

    Args:
        data: Any of {firstName, lastName, password, email}

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no such user
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    set_clause = sql_for_partial_update(data, JS_TO_SQL)
    username_idx = len(set_clause.values) + 1

    rows = query(
        db,
        f"""UPDATE users
            SET {set_clause.set_cols}
            WHERE username = ${username_idx}
            RETURNING {USER_COLUMNS}""",
        [*set_clause.values, username],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    return _as_user(rows[0])


def remove(db: Session, username: str) -> None:
    """
    Delete a user.

    Raises:
        NotFoundError: If no such user
    """
    rows = query(db, "DELETE FROM users WHERE username = $1 RETURNING username", [username])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the job or the user does not exist
        BadRequestError: If the user already applied
    """
    if not query(db, "SELECT id FROM jobs WHERE id = $1", [job_id]):
        raise NotFoundError(f"No job with id: {job_id}")

    if not query(db, "SELECT username FROM users WHERE username = $1", [username]):
        raise NotFoundError(f"No user: {username}")

    existing = query(
        db,
        "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
        [username, job_id],
    )
    if existing:
        raise BadRequestError(f"Already applied to job: {job_id}")

    query(db, "INSERT INTO applications (username, job_id) VALUES ($1, $2)", [username, job_id])
    db.commit()
    logger.info(f"User {username} applied to job {job_id}")
