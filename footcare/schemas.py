# footcare/schemas.py
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Literal, Optional
from datetime import datetime

SessionStatus = Literal["active", "scheduled", "completed"]


class ConversationEntry(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str
    timestamp: Optional[datetime] = None


class Patient(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    created_at: datetime


class Session(BaseModel):
    id: str
    patient_id: Optional[str] = None
    issue_category: str = "general"
    symptoms: str = ""
    diagnosis: str = ""
    conversation: List[ConversationEntry] = []
    appointment_date: Optional[datetime] = None
    follow_up_date: Optional[datetime] = None
    satisfaction_score: Optional[int] = Field(None, ge=1, le=5)
    satisfaction_feedback: Optional[str] = None
    status: SessionStatus = "active"
    created_at: datetime
    updated_at: datetime


class Message(BaseModel):
    id: str
    session_id: str
    role: Literal["user", "assistant"]
    content: str
    created_at: datetime


class Analytics(BaseModel):
    totalPatients: int
    totalSessions: int
    activeSessions: int
    completedSessions: int
    avgSatisfaction: float
    issueCategories: Dict[str, int] = {}


# --- request bodies ---


class PatientCreate(BaseModel):
    # checked for presence in the route so empty strings are rejected too
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class SessionCreate(BaseModel):
    patientId: Optional[str] = None
    issueCategory: Optional[str] = None
    symptoms: Optional[str] = None


class SessionUpdate(BaseModel):
    """Partial session fields; only the keys actually sent are applied."""

    patient_id: Optional[str] = None
    issue_category: Optional[str] = None
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    conversation: Optional[List[ConversationEntry]] = None
    appointment_date: Optional[datetime] = None
    follow_up_date: Optional[datetime] = None
    satisfaction_score: Optional[int] = Field(None, ge=1, le=5)
    satisfaction_feedback: Optional[str] = None
    status: Optional[SessionStatus] = None

    @field_validator("issue_category", "symptoms", "diagnosis", "conversation", "status", mode="before")
    @classmethod
    def not_null(cls, value):
        # may be left out of a patch, but a session always has a value for these
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class SessionPatch(BaseModel):
    sessionId: Optional[str] = None
    updates: SessionUpdate = Field(default_factory=SessionUpdate)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    messages: Optional[List[ChatMessage]] = None
    sessionId: Optional[str] = None
    patientId: Optional[str] = None


class ChatResponse(BaseModel):
    message: str
    isDemoMode: bool
