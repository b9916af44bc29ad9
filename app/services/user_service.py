# /luct-portal/app/services/user_service.py

"""
Registration and credential checks.

Login failures are indistinguishable: an unknown email and a wrong password
both produce the same "Invalid credentials" error.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError

from ..core import security
from ..core.exceptions import AuthenticationFailed, Conflict, NotFound
from ..db.models.user_models import User as UserModel
from ..models.user_model import User, UserCreate, Token
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def create_user(db: DatabaseService, user: UserCreate) -> UserModel:
    email = user.email.lower()
    if db.get_user_by_email(email):
        raise Conflict("An account with this email already exists.")

    if user.faculty_id and not db.get_faculty_by_id(user.faculty_id):
        raise NotFound(f"Faculty with ID {user.faculty_id} not found.")

    record = {
        "id": f"usr_{uuid.uuid4().hex[:12]}",
        "name": user.name.strip(),
        "email": email,
        "password_hash": security.hash_password(user.password),
        "role": user.role.value,
        "faculty_id": user.faculty_id,
    }
    try:
        new_user = db.add_user(record)
    except IntegrityError:
        logger.info("Concurrent duplicate registration for %s", email)
        raise Conflict("An account with this email already exists.")
    logger.info("Registered %s %s", new_user.role, new_user.id)
    return new_user


def authenticate_user(db: DatabaseService, email: str, password: str) -> Optional[UserModel]:
    user = db.get_user_by_email(email)
    if not user or not security.verify_password(password, user.password_hash):
        return None
    return user


def login(db: DatabaseService, email: str, password: str) -> Token:
    user = authenticate_user(db, email=email, password=password)
    if user is None:
        logger.info("Failed login attempt")
        raise AuthenticationFailed("Invalid credentials")

    access_token = security.create_access_token(subject=user.id, role=user.role, name=user.name)
    return Token(token=access_token, token_type="bearer", user=User.model_validate(user))
