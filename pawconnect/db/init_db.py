from pawconnect.db.session import engine
from pawconnect.db.base import Base

# IMPORTANT: import models so they register with Base.metadata
import pawconnect.db.models  # noqa: F401

def init_db() -> None:
    Base.metadata.create_all(bind=engine)
