from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from datetime import datetime

from models.steps import ScreenView
from state import DocumentMethod, Language
from tools.voice import SpeechRequest

class WizardResponse(BaseModel):
    """Screen the client should show after an action, plus the speech it should play"""
    session_id: str = Field(..., description="Unique session identifier")
    screen: ScreenView = Field(..., description="The active screen")
    speech: List[SpeechRequest] = Field(default_factory=list, description="Voice prompts requested by the action")

class SessionStartRequest(BaseModel):
    """Request model for starting a new session"""
    user_id: Optional[str] = Field(None, description="Optional user identifier")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Additional session metadata")

class MethodRequest(BaseModel):
    method: DocumentMethod = Field(..., description="KYC method: digilocker, aadhaar or face")

class IdentifierRequest(BaseModel):
    value: str = Field(..., min_length=1, description="File name, Aadhaar number or capture marker")

class DocumentUploadRequest(BaseModel):
    file_name: str = Field(..., description="Name of the selected document file")

class KeypadRequest(BaseModel):
    """Press a keypad digit, or clear the entered number"""
    digit: Optional[str] = Field(None, min_length=1, max_length=1, description="Single digit 0-9")
    clear: bool = Field(False, description="Clear the number instead of pressing a digit")

class NameRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the user")

class AdvanceRequest(BaseModel):
    target_step: int = Field(..., description="Index of the step to move to")

class QueryRequest(BaseModel):
    query: str = Field("", description="Free-text help question")

class HelpRequest(BaseModel):
    open: bool = Field(True, description="Open (true) or close (false) the help overlay")

class ConnectivityRequest(BaseModel):
    online: bool

class ConnectivityResponse(BaseModel):
    online: bool
    subscribed_sessions: int

class SessionStatusResponse(BaseModel):
    """Response model for session status"""
    session_id: str
    current_step: int
    completion_step: int
    document_method: DocumentMethod
    document_identifier: Optional[str] = Field(None, description="Masked for Aadhaar numbers")
    face_artifact_present: bool
    preferred_language: Language
    subject_name: Optional[str] = None
    online: bool
    is_active: bool
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    last_activity: Optional[str] = None

class ErrorResponse(BaseModel):
    """Standard error response model"""
    error: str
    detail: Optional[str] = None
    notice: Optional[str] = None
    session_id: Optional[str] = None
    timestamp: str = Field(default_factory=lambda: datetime.utcnow().isoformat())

class HealthResponse(BaseModel):
    """Health check response model"""
    status: str
    active_sessions: int
    online: bool
    service: str
    timestamp: str = Field(default_factory=lambda: datetime.utcnow().isoformat())

class SessionListResponse(BaseModel):
    """Response model for listing sessions"""
    active_sessions: int
    sessions: List[SessionStatusResponse]
