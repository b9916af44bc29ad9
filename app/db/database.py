# /luct-portal/app/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import DATABASE_URL, DB_POOL_SIZE, DB_POOL_TIMEOUT, DB_POOL_RECYCLE

# SQLite (local development) needs the same-thread check disabled because FastAPI
# runs sync endpoints in a thread pool. Pool tuning only applies to real servers.
if DATABASE_URL.startswith("sqlite"):
    engine_args = {"connect_args": {"check_same_thread": False}}
else:
    engine_args = {
        "pool_size": DB_POOL_SIZE,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_recycle": DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }
engine = create_engine(DATABASE_URL, **engine_args)

# Each instance of SessionLocal is one database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency to get a DB session, one per request.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
