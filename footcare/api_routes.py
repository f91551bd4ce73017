# footcare/api_routes.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from .analytics import compute_analytics
from .chat_chain import generate_reply
from .db import RecordStore
from .schemas import (
    ChatRequest,
    ChatResponse,
    ConversationEntry,
    PatientCreate,
    SessionCreate,
    SessionPatch,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


# --- Patient endpoints ---


@router.post("/patients")
def create_patient(body: PatientCreate, store: RecordStore = Depends(get_store)):
    if not body.name or not body.email or not body.phone:
        raise HTTPException(status_code=400, detail="Name, email, and phone required")
    try:
        patient = store.create_patient(body.name, body.email, body.phone)
    except Exception:
        logger.exception("patient creation failed")
        raise HTTPException(status_code=500, detail="Failed to create patient")
    return {"patient": patient}


@router.get("/patients")
def get_patients(id: Optional[str] = None, store: RecordStore = Depends(get_store)):
    if id:
        patient = store.get_patient(id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")
        return {"patient": patient}
    return {"patients": store.list_patients()}


# --- Session endpoints ---


@router.post("/sessions")
def create_session(body: SessionCreate, store: RecordStore = Depends(get_store)):
    try:
        session = store.create_session(
            patient_id=body.patientId,
            issue_category=body.issueCategory or "general",
            symptoms=body.symptoms or "",
        )
    except Exception:
        logger.exception("session creation failed")
        raise HTTPException(status_code=500, detail="Failed to create session")
    return {"session": session}


@router.get("/sessions")
def get_sessions(
    id: Optional[str] = None,
    patientId: Optional[str] = None,
    store: RecordStore = Depends(get_store),
):
    if id:
        session = store.get_session(id)
        if not session:
            raise HTTPException(status_code=404, detail="Session not found")
        return {"session": session}
    if patientId:
        return {"sessions": store.list_sessions_for_patient(patientId)}
    return {"sessions": store.list_sessions()}


@router.patch("/sessions")
def update_session(body: SessionPatch, store: RecordStore = Depends(get_store)):
    if not body.sessionId:
        raise HTTPException(status_code=400, detail="Session ID required")
    try:
        session = store.update_session(
            body.sessionId, body.updates.model_dump(exclude_unset=True)
        )
    except Exception:
        logger.exception("session update failed for %s", body.sessionId)
        raise HTTPException(status_code=500, detail="Failed to update session")
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return {"session": session}


# --- Message / analytics endpoints ---


@router.get("/messages")
def get_messages(sessionId: Optional[str] = None, store: RecordStore = Depends(get_store)):
    if not sessionId:
        raise HTTPException(status_code=400, detail="Session ID required")
    return {"messages": store.list_messages_for_session(sessionId)}


@router.get("/analytics")
def get_analytics(store: RecordStore = Depends(get_store)):
    try:
        analytics = compute_analytics(store)
    except Exception:
        logger.exception("analytics computation failed")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")
    return {"analytics": analytics}


# --- Chat endpoint ---


@router.post("/chat", response_model=ChatResponse)
def chat(body: ChatRequest, store: RecordStore = Depends(get_store)):
    if body.messages is None:
        raise HTTPException(status_code=400, detail="Messages array required")
    try:
        content, demo = generate_reply(body.messages)

        if body.sessionId:
            store.create_message(body.sessionId, "assistant", content)
            store.append_conversation(
                body.sessionId,
                ConversationEntry(
                    role="assistant",
                    content=content,
                    timestamp=datetime.now(timezone.utc),
                ),
            )
    except Exception:
        logger.exception("chat generation failed")
        raise HTTPException(status_code=500, detail="Failed to process chat message")
    return ChatResponse(message=content, isDemoMode=demo)
