# /luct-portal/app/routers/auth_router.py

"""
This module defines the public-facing API for all authentication-related actions.

It includes endpoints for:
- User registration (`/register`)
- User login and token generation (`/login`)
- Retrieving the current user's profile (`/me`)

Business-rule failures raised by `user_service` (duplicate email, invalid
credentials) are translated to HTTP responses by the application-wide
exception handlers, so the endpoints here stay free of error plumbing.
"""

from fastapi import APIRouter, Depends, status

# --- Application-specific Imports ---
from app.core.deps import get_current_user_record
from app.models.user_model import LoginRequest, Token, User, UserCreate
from app.services import user_service
from app.services.database_service import DatabaseService, get_db_service

# --- Router Initialization ---
router = APIRouter()


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED, summary="Register a New User")
def register_user(user_in: UserCreate, db: DatabaseService = Depends(get_db_service)):
    """Creates an account with a fixed role. A duplicate email is rejected with 409."""
    return user_service.create_user(db=db, user=user_in)


@router.post("/login", response_model=Token, summary="Log In and Obtain a Token")
def login(credentials: LoginRequest, db: DatabaseService = Depends(get_db_service)):
    """
    Exchanges email and password for a bearer token valid for seven days.
    Any failure returns the same 401 "Invalid credentials" response.
    """
    return user_service.login(db=db, email=credentials.email, password=credentials.password)


@router.get("/me", response_model=User, summary="Get Current User")
def read_users_me(current_user=Depends(get_current_user_record)):
    return current_user
