"""
SQLAlchemy ORM models for the CV document store.
"""
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func

from cv_endpoint.database import Base


# Fixed document keys (one profile, one page layout)
PROFILE_KEY = "cv"
PAGE_CONFIG_KEY = "cv-page"


class StoredDocument(Base):
    """A whole JSON document persisted under a fixed key."""

    __tablename__ = "cv_documents"

    key = Column(String(64), primary_key=True)
    # JSON rather than JSONB so category key order survives a round trip
    data = Column(JSON, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
