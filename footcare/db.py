# footcare/db.py
import logging
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional, Any
from uuid import uuid4

from .schemas import ConversationEntry, Message, Patient, Session

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_id() -> str:
    # millisecond clock plus a random suffix, unique within a map
    return f"{int(time.time() * 1000)}-{uuid4().hex[:9]}"


class RecordStore:
    """In-memory patient/session/message store.

    Lives for the lifetime of the process. Not synchronised: callers are
    expected to issue one request per session at a time. Every getter returns
    a copy so the stored records only change through the methods below.
    """

    def __init__(self):
        self.patients: Dict[str, Patient] = {}
        self.sessions: Dict[str, Session] = {}
        self.messages: Dict[str, Message] = {}

    # --- patients ---

    def create_patient(self, name: str, email: str, phone: str) -> Patient:
        patient = Patient(
            id=generate_id(),
            name=name,
            email=email,
            phone=phone,
            created_at=utcnow(),
        )
        self.patients[patient.id] = patient
        logger.info("created patient %s", patient.id)
        return patient.model_copy(deep=True)

    def get_patient(self, patient_id: str) -> Optional[Patient]:
        patient = self.patients.get(patient_id)
        return patient.model_copy(deep=True) if patient else None

    def list_patients(self) -> List[Patient]:
        return [p.model_copy(deep=True) for p in self.patients.values()]

    # --- sessions ---

    def create_session(
        self,
        patient_id: Optional[str] = None,
        issue_category: str = "general",
        symptoms: str = "",
    ) -> Session:
        now = utcnow()
        session = Session(
            id=generate_id(),
            patient_id=patient_id,
            issue_category=issue_category,
            symptoms=symptoms,
            diagnosis="",
            conversation=[],
            status="active",
            created_at=now,
            updated_at=now,
        )
        self.sessions[session.id] = session
        logger.info("created session %s for patient %s", session.id, patient_id)
        return session.model_copy(deep=True)

    def get_session(self, session_id: str) -> Optional[Session]:
        session = self.sessions.get(session_id)
        return session.model_copy(deep=True) if session else None

    def _newest_first(self, sessions: List[Session]) -> List[Session]:
        # reversed first so equal timestamps still put the later insert first
        ordered = sorted(reversed(sessions), key=lambda s: s.created_at, reverse=True)
        return [s.model_copy(deep=True) for s in ordered]

    def list_sessions(self) -> List[Session]:
        return self._newest_first(list(self.sessions.values()))

    def list_sessions_for_patient(self, patient_id: str) -> List[Session]:
        return self._newest_first(
            [s for s in self.sessions.values() if s.patient_id == patient_id]
        )

    def update_session(self, session_id: str, updates: Dict[str, Any]) -> Optional[Session]:
        session = self.sessions.get(session_id)
        if session is None:
            return None
        merged = session.model_dump()
        merged.update(updates)
        merged["updated_at"] = utcnow()
        updated = Session.model_validate(merged)
        self.sessions[session_id] = updated
        logger.info("updated session %s fields=%s", session_id, sorted(updates))
        return updated.model_copy(deep=True)

    def append_conversation(self, session_id: str, entry: ConversationEntry) -> Optional[Session]:
        session = self.sessions.get(session_id)
        if session is None:
            return None
        conversation = [e.model_dump() for e in session.conversation]
        conversation.append(entry.model_dump())
        return self.update_session(session_id, {"conversation": conversation})

    # --- messages ---

    def create_message(self, session_id: str, role: str, content: str) -> Message:
        message = Message(
            id=generate_id(),
            session_id=session_id,
            role=role,
            content=content,
            created_at=utcnow(),
        )
        self.messages[message.id] = message
        return message.model_copy(deep=True)

    def list_messages_for_session(self, session_id: str) -> List[Message]:
        found = [m for m in self.messages.values() if m.session_id == session_id]
        return [m.model_copy(deep=True) for m in sorted(found, key=lambda m: m.created_at)]


def init_store(app) -> RecordStore:
    store = RecordStore()
    app.state.store = store
    logger.info("record store initialised")
    return store


def close_store(app):
    store = getattr(app.state, "store", None)
    if store is not None:
        logger.info(
            "discarding record store (%d patients, %d sessions, %d messages)",
            len(store.patients),
            len(store.sessions),
            len(store.messages),
        )
        app.state.store = None
