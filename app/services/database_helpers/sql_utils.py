# /luct-portal/app/services/database_helpers/sql_utils.py

from typing import Any, Dict


def model_to_dict(obj) -> Dict[str, Any]:
    """Column values of a SQLAlchemy object as a plain dictionary."""
    return {c.name: getattr(obj, c.name) for c in obj.__table__.columns}
