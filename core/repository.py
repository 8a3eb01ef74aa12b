"""Repository for document collections stored through SQLAlchemy.

Exposes the create/find/update/delete interface the planning engine expects
from its catalog, patient and chart stores. Records are plain dicts with an
`id` plus `created_at`/`updated_at` timestamps; the JSON payload lives in
`database.models.Document.data`.
"""

import json
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from database.models import Document

_RESERVED = ("id", "created_at", "updated_at")


class CollectionRepository:
    """Generic store for one named collection of JSON documents.

    Attributes:
        session: Database session for executing queries.
        collection: Collection name (e.g. 'foods', 'patients').
    """

    def __init__(self, session: Session, collection: str):
        self.session = session
        self.collection = collection

    def _query(self):
        return self.session.query(Document).filter(Document.collection == self.collection)

    @staticmethod
    def _to_record(doc: Document) -> Dict[str, Any]:
        record = json.loads(doc.data)
        record["id"] = doc.id
        record["created_at"] = doc.created_at.isoformat() if doc.created_at else None
        record["updated_at"] = doc.updated_at.isoformat() if doc.updated_at else None
        return record

    @staticmethod
    def _payload(data: Dict[str, Any]) -> str:
        body = {k: v for k, v in data.items() if k not in _RESERVED}
        return json.dumps(body, default=str)

    def _new_document(self, data: Dict[str, Any]) -> Document:
        now = datetime.utcnow()
        return Document(
            id=str(data.get("id") or uuid.uuid4()),
            collection=self.collection,
            data=self._payload(data),
            created_at=now,
            updated_at=now,
        )

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Persist a new document and return it with its assigned id."""
        doc = self._new_document(data)
        self.session.add(doc)
        self.session.commit()
        self.session.refresh(doc)
        return self._to_record(doc)

    def create_many(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Persist several documents in one commit, preserving their order."""
        docs = [self._new_document(row) for row in rows]
        self.session.add_all(docs)
        self.session.commit()
        return [self._to_record(doc) for doc in docs]

    def find_all(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return documents in insertion order, optionally capped at `limit`."""
        query = self._query().order_by(Document.seq)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_record(doc) for doc in query.all()]

    def find_by_id(self, id: Any) -> Optional[Dict[str, Any]]:
        if id is None:
            return None
        doc = self._query().filter(Document.id == str(id)).first()
        return self._to_record(doc) if doc else None

    def find_by_field(self, field: str, value: Any) -> List[Dict[str, Any]]:
        """Return documents whose top-level `field` equals `value`."""
        return [record for record in self.find_all() if record.get(field) == value]

    def update(self, id: Any, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace the whole document body in a single commit.

        Returns:
            The updated record, or None when no document has that id.
        """
        doc = self._query().filter(Document.id == str(id)).first()
        if doc is None:
            return None
        doc.data = self._payload(data)
        doc.updated_at = datetime.utcnow()
        self.session.commit()
        self.session.refresh(doc)
        return self._to_record(doc)

    def delete(self, id: Any) -> bool:
        doc = self._query().filter(Document.id == str(id)).first()
        if doc is None:
            return False
        self.session.delete(doc)
        self.session.commit()
        return True

    def count(self) -> int:
        return self._query().count()
