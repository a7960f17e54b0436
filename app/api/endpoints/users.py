"""
User endpoints.

Listing and creating users is for admins. A user's own record may be read,
changed or deleted by that user or by an admin.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import require_admin, require_correct_user_or_admin
from app.core.exceptions import BadRequestError
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.user import (
    ApplicationResult,
    UserCreateRequest,
    UserCreatedResult,
    UserDeleted,
    UserDetailResult,
    UserList,
    UserResult,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=UserCreatedResult, dependencies=[Depends(require_admin)])
def create_user(request: UserCreateRequest, db: Session = Depends(get_db)):
    """
    Add a user. Not the registration endpoint: admins use this to add users,
    who may themselves be admins.

    Returns { user: { username, firstName, lastName, email, isAdmin }, token }

    Authorization required: admin
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    return {"user": user, "token": create_token(user)}


@router.get("", response_model=UserList, dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    """
    List all users.

    Authorization required: admin
    """
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailResult, dependencies=[Depends(require_correct_user_or_admin)])
def get_user(username: str, db: Session = Depends(get_db)):
    """
    Retrieve a user; jobs is the list of job ids applied to.

    Authorization required: same user or admin
    """
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserResult, dependencies=[Depends(require_correct_user_or_admin)])
def update_user(username: str, request: UserUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a user.

    Fields can be: { firstName, lastName, password, email }

    Authorization required: same user or admin
    """
    user = user_crud.update(db, username, request.model_dump(exclude_unset=True, by_alias=True))
    return {"user": user}


@router.delete("/{username}", response_model=UserDeleted, dependencies=[Depends(require_correct_user_or_admin)])
def delete_user(username: str, db: Session = Depends(get_db)):
    """
    Delete a user.

    Authorization required: same user or admin
    """
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{job_id}",
    response_model=ApplicationResult,
    dependencies=[Depends(require_correct_user_or_admin)],
)
def apply_to_job(username: str, job_id: str, db: Session = Depends(get_db)):
    """
    Apply a user to a job.

    job_id must be a whole number ("7"); "7.0" or "abc" is rejected with 400.

    Returns { applied: jobId }

    Authorization required: same user or admin
    """
    try:
        job_id_num = int(job_id)
    except ValueError:
        raise BadRequestError("Job ID must be a number")

    user_crud.apply_to_job(db, username, job_id_num)
    return {"applied": job_id_num}
