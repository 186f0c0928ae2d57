"""Lead stores behind a single create/list interface.

``MemoryLeadStore`` is the process-lifetime reference store,
``DatabaseLeadStore`` the durable SQLAlchemy table and ``SupabaseLeadStore``
the hosted table reached over Supabase REST. One is chosen by the
``LEAD_STORE`` setting.
"""

import threading
from abc import ABC, abstractmethod

from sqlalchemy.exc import SQLAlchemyError

from haloride.core.errors import LeadStoreError
from haloride.core.settings import get_settings
from haloride.core.time import utc_now
from haloride.models.lead import Lead
from haloride.schemas.lead import LeadCreate, LeadRead
from haloride.services.supabase import SupabaseClient


class LeadStore(ABC):
    @abstractmethod
    def create(self, lead: LeadCreate) -> LeadRead:
        """Persist one lead and return it with its id and created_at."""

    @abstractmethod
    def list(self) -> list[LeadRead]:
        """Return every stored lead."""

    def close(self) -> None:
        """Release backend resources held by the store."""


class MemoryLeadStore(LeadStore):
    """Volatile store; ids start at 1 and are lost on restart."""

    def __init__(self):
        self._leads: dict[int, LeadRead] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, lead: LeadCreate) -> LeadRead:
        with self._lock:
            lead_id = self._next_id
            self._next_id += 1
            record = LeadRead(id=lead_id, created_at=utc_now(), **lead.to_storage_row())
            self._leads[lead_id] = record
        return record

    def list(self) -> list[LeadRead]:
        with self._lock:
            return list(self._leads.values())


class DatabaseLeadStore(LeadStore):
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def create(self, lead: LeadCreate) -> LeadRead:
        db = self._session_factory()
        try:
            row = Lead(**lead.to_storage_row())
            db.add(row)
            db.commit()
            db.refresh(row)
            return LeadRead.model_validate(row)
        except SQLAlchemyError as exc:
            db.rollback()
            raise LeadStoreError(f"Database error: {exc.__class__.__name__}", details=str(exc)) from exc
        finally:
            db.close()

    def list(self) -> list[LeadRead]:
        db = self._session_factory()
        try:
            rows = db.query(Lead).order_by(Lead.id.asc()).all()
            return [LeadRead.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            raise LeadStoreError(f"Database error: {exc.__class__.__name__}", details=str(exc)) from exc
        finally:
            db.close()


class SupabaseLeadStore(LeadStore):
    """Hosted table; ``created_at`` comes from the column default."""

    def __init__(self, client: SupabaseClient, table: str):
        self._client = client
        self._table = table

    def create(self, lead: LeadCreate) -> LeadRead:
        row = self._client.insert(self._table, lead.to_storage_row())
        return LeadRead.model_validate(row)

    def list(self) -> list[LeadRead]:
        return [LeadRead.model_validate(row) for row in self._client.select(self._table)]

    def close(self) -> None:
        self._client.close()


def build_lead_store(settings) -> LeadStore:
    if settings.lead_store == "supabase":
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set for the supabase lead store")
        client = SupabaseClient(settings.supabase_url, settings.supabase_anon_key, timeout=settings.supabase_timeout)
        return SupabaseLeadStore(client, settings.supabase_table)
    if settings.lead_store == "database":
        from haloride.db.session import SessionLocal

        return DatabaseLeadStore(SessionLocal)
    return MemoryLeadStore()


_store_instance = None


def get_lead_store() -> LeadStore:
    """Return the process-wide store selected by settings."""
    global _store_instance
    if _store_instance is None:
        _store_instance = build_lead_store(get_settings())
    return _store_instance
