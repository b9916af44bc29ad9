# /luct-portal/app/core/deps.py

"""
FastAPI dependencies that implement the authorization gate.

`get_current_user` turns the bearer token into a `CurrentUser`; `require_roles`
builds a per-endpoint allow-list on top of it. Routers receive the resolved
identity as a plain argument, so it is scoped to the request and never shared.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from . import security
from .exceptions import AuthenticationFailed, PermissionDenied
from ..models.user_model import CurrentUser, Role
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

# auto_error is off so that a missing header is reported as 401, not 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationFailed("Not authenticated.")

    payload = security.decode_access_token(credentials.credentials)
    user_id = payload.get("sub") or payload.get("id")
    raw_role = payload.get("role")
    if not user_id or not raw_role:
        raise AuthenticationFailed("Could not validate credentials.")

    try:
        role = Role(raw_role)
    except ValueError:
        logger.warning("Rejected token for user %s with unknown role %r", user_id, raw_role)
        raise AuthenticationFailed("Could not validate credentials.")

    return CurrentUser(id=user_id, role=role, name=payload.get("name") or "")


def require_roles(*allowed: Role) -> Callable[..., CurrentUser]:
    """
    Returns a dependency that admits only callers whose role is in `allowed`.
    Calling it with no roles admits any authenticated caller.
    """
    allowed_set = frozenset(allowed)

    def _check_role(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if allowed_set and current_user.role not in allowed_set:
            logger.info(
                "Role %s denied; endpoint allows %s",
                current_user.role.value,
                sorted(r.value for r in allowed_set),
            )
            raise PermissionDenied("You do not have permission to perform this action.")
        return current_user

    return _check_role


def get_current_user_record(
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    """Loads the full User row, for handlers that need more than the token claims."""
    user = db.get_user_by_id(current_user.id)
    if user is None:
        raise AuthenticationFailed("Could not validate credentials.")
    return user


def get_prl_faculty_id(
    current_user: CurrentUser = Depends(require_roles(Role.PRL)),
    db: DatabaseService = Depends(get_db_service),
) -> Optional[str]:
    """Resolves the faculty every PRL query is scoped to. `None` means no faculty."""
    user = db.get_user_by_id(current_user.id)
    if user is None:
        raise AuthenticationFailed("Could not validate credentials.")
    return user.faculty_id
