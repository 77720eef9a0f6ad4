"""Module: session."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pawconnect.core.config import settings

# SQLite needs cross-thread access because sync endpoints run in a threadpool.
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, pool_pre_ping=True, connect_args=connect_args)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
