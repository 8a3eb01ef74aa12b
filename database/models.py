"""SQLAlchemy ORM models for the diet planning service.

Patients, catalog foods, recipes and diet charts are stored as JSON
documents in one table, partitioned by `collection`. The engine only needs
a generic create/find/update/delete store, so rows stay behavior-free.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class Document(Base):
    """One JSON document in a named collection.

    `seq` is the insertion order and defines catalog order for stable ranking;
    `id` is the opaque identifier handed to callers.
    """

    __tablename__ = "documents"
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, index=True, nullable=False)
    collection = Column(String, index=True, nullable=False)
    data = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
