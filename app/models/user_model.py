# /luct-portal/app/models/user_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Role(str, Enum):
    STUDENT = "student"
    LECTURER = "lecturer"
    PRL = "prl"
    PL = "pl"


class UserCreate(BaseModel):
    """Registration payload. The role chosen here can never be changed later."""
    name: str = Field(..., min_length=2, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    role: Role
    faculty_id: Optional[str] = Field(default=None, description="Required for PRLs to see any faculty data.")


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: EmailStr
    role: Role
    faculty_id: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    user: User


class CurrentUser(BaseModel):
    """The identity resolved from a bearer token, attached to each request."""
    id: str
    role: Role
    name: str = ""
