# /luct-portal/app/services/database_helpers/user_repository_sql.py

"""
Raw SQLAlchemy queries for the `User` and `Faculty` tables, the foundation of
registration, login and PRL faculty scoping.
"""

from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.models.user_models import Faculty, User


class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- User Methods ---

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Email lookups are case-insensitive; addresses are stored lower-cased."""
        return self.db.query(User).filter(User.email == email.lower()).first()

    def add_user(self, record: Dict) -> User:
        """A concurrent registration of the same email raises `IntegrityError`."""
        new_user = User(**record)
        self.db.add(new_user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(new_user)
        return new_user

    # --- Faculty Methods ---

    def get_all_faculties(self) -> List[Faculty]:
        return self.db.query(Faculty).order_by(Faculty.name).all()

    def get_faculty_by_id(self, faculty_id: str) -> Optional[Faculty]:
        return self.db.query(Faculty).filter(Faculty.id == faculty_id).first()

    def get_faculty_by_name(self, name: str) -> Optional[Faculty]:
        return self.db.query(Faculty).filter(func.lower(Faculty.name) == name.lower()).first()

    def add_faculty(self, record: Dict) -> Faculty:
        new_faculty = Faculty(**record)
        self.db.add(new_faculty)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(new_faculty)
        return new_faculty
