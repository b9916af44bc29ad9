# /luct-portal/app/db/base_class.py

from sqlalchemy.orm import declarative_base, declared_attr


class CustomBase:
    # Default table name is the lower-cased, pluralized class name
    # (e.g. `Course` -> `courses`). Irregular plurals override it.
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"


Base = declarative_base(cls=CustomBase)
