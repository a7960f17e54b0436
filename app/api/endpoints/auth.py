"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create a (non-admin) account and get a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.user import TokenResponse, UserAuthRequest, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(request: UserAuthRequest, db: Session = Depends(get_db)):
    """
    Authenticate a user and return a token for further requests.

    Authorization required: none
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user['username']}")
    return TokenResponse(token=create_token(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user. Registered users are never admins.

    Authorization required: none
    """
    data = request.model_dump(by_alias=True)
    data["isAdmin"] = False
    user = user_crud.register(db, data)
    return TokenResponse(token=create_token(user))
