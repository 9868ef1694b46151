import uuid
import logging
from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends
from typing import Dict, Any

from ..models import (
    WizardResponse,
    SessionStartRequest,
    SessionStatusResponse,
    SessionListResponse,
    MethodRequest,
    IdentifierRequest,
    DocumentUploadRequest,
    KeypadRequest,
    NameRequest,
    AdvanceRequest,
    QueryRequest,
    HelpRequest,
    ConnectivityRequest,
    ConnectivityResponse,
)
from ..dependencies import validate_session_id, get_app_settings, get_connectivity_signal
from config.settings import Settings
from models.steps import WizardStep
from orchestrator.controller import WizardController
from orchestrator.exceptions import ActionNotAllowed
from state import DocumentMethod
from tools.capture_tools import document_file_name, mask_aadhaar, press_keypad
from tools.connectivity import ConnectivitySignal
from tools.voice import RecordingVoice

router = APIRouter()
logger = logging.getLogger(__name__)

# Store active sessions (in production, use Redis or database)
active_sessions: Dict[str, Dict[str, Any]] = {}

def _get_session(session_id: str) -> Dict[str, Any]:
    if session_id not in active_sessions:
        raise HTTPException(
            status_code=404,
            detail="Session not found. Please start a new session using /session/start"
        )
    session_data = active_sessions[session_id]
    session_data["last_activity"] = datetime.utcnow().isoformat()
    return session_data

def _respond(session_id: str, session_data: Dict[str, Any]) -> WizardResponse:
    controller: WizardController = session_data["controller"]
    voice: RecordingVoice = session_data["voice"]
    return WizardResponse(
        session_id=session_id,
        screen=controller.screen(),
        speech=voice.drain()
    )

def _status(session_id: str, session_data: Dict[str, Any]) -> SessionStatusResponse:
    controller: WizardController = session_data["controller"]
    record = controller.record
    identifier = record.document_identifier or None
    if identifier and record.document_method == DocumentMethod.NATIONAL_ID_NUMBER:
        identifier = mask_aadhaar(identifier)

    return SessionStatusResponse(
        session_id=session_id,
        current_step=int(controller.current_step),
        completion_step=record.completion_step,
        document_method=record.document_method,
        document_identifier=identifier,
        face_artifact_present=record.face_artifact_present,
        preferred_language=record.preferred_language,
        subject_name=record.subject_name,
        online=controller.online,
        is_active=True,
        user_id=session_data.get("user_id"),
        created_at=session_data.get("created_at"),
        last_activity=session_data.get("last_activity")
    )

# -------------------------------------------------------------------------------------------------
# SESSION LIFECYCLE
# -------------------------------------------------------------------------------------------------

@router.post("/session/start", response_model=WizardResponse)
async def start_session(
    request: SessionStartRequest,
    settings: Settings = Depends(get_app_settings),
    connectivity: ConnectivitySignal = Depends(get_connectivity_signal)
):
    """Start a new KYC wizard session on the splash screen"""
    session_id = f"api-session-{uuid.uuid4()}"

    # The server cannot hear the user; speech requests are returned to the client
    voice = RecordingVoice()
    controller = WizardController(voice, connectivity, settings=settings)

    active_sessions[session_id] = {
        "controller": controller,
        "voice": voice,
        "user_id": request.user_id,
        "metadata": request.metadata or {},
        "created_at": datetime.utcnow().isoformat(),
        "last_activity": datetime.utcnow().isoformat()
    }

    logger.info(f"New session started: {session_id}")
    return _respond(session_id, active_sessions[session_id])

@router.get("/session/{session_id}/screen", response_model=WizardResponse)
async def get_screen(session_id: str = Depends(validate_session_id)):
    """Current screen of the session"""
    return _respond(session_id, _get_session(session_id))

@router.get("/session/{session_id}/status", response_model=SessionStatusResponse)
async def get_session_status(session_id: str = Depends(validate_session_id)):
    """Get current session status and progress"""
    return _status(session_id, _get_session(session_id))

@router.delete("/session/{session_id}")
async def end_session(session_id: str = Depends(validate_session_id)):
    """End a KYC session and cleanup resources"""
    session_data = _get_session(session_id)
    session_data["controller"].close()
    del active_sessions[session_id]

    logger.info(f"Session ended: {session_id}")
    return {"message": "Session ended successfully", "session_id": session_id}

@router.get("/sessions", response_model=SessionListResponse)
async def list_active_sessions():
    """List all active sessions (admin endpoint)"""
    sessions = [_status(sid, data) for sid, data in active_sessions.items()]
    return SessionListResponse(active_sessions=len(sessions), sessions=sessions)

# -------------------------------------------------------------------------------------------------
# WIZARD ACTIONS
# -------------------------------------------------------------------------------------------------

@router.post("/session/{session_id}/language", response_model=WizardResponse)
async def toggle_language(session_id: str = Depends(validate_session_id)):
    """Switch between the primary and secondary language (splash screen only)"""
    session_data = _get_session(session_id)
    session_data["controller"].toggle_language()
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/help", response_model=WizardResponse)
async def toggle_help(request: HelpRequest, session_id: str = Depends(validate_session_id)):
    session_data = _get_session(session_id)
    controller: WizardController = session_data["controller"]
    if request.open:
        controller.open_help()
    else:
        controller.close_help()
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/name", response_model=WizardResponse)
async def record_name(request: NameRequest, session_id: str = Depends(validate_session_id)):
    session_data = _get_session(session_id)
    session_data["controller"].record_name(request.name)
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/method", response_model=WizardResponse)
async def select_method(request: MethodRequest, session_id: str = Depends(validate_session_id)):
    """Choose Digilocker, Aadhaar or Face KYC"""
    session_data = _get_session(session_id)
    session_data["controller"].select_method(request.method)
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/identifier", response_model=WizardResponse)
async def record_identifier(request: IdentifierRequest, session_id: str = Depends(validate_session_id)):
    """Record the artifact for the active method as typed by the user"""
    session_data = _get_session(session_id)
    session_data["controller"].record_identifier(request.value)
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/document", response_model=WizardResponse)
async def upload_document(request: DocumentUploadRequest, session_id: str = Depends(validate_session_id)):
    """Digilocker KYC: record the selected document's file name"""
    session_data = _get_session(session_id)
    session_data["controller"].record_identifier(document_file_name(request.file_name))
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/keypad", response_model=WizardResponse)
async def keypad_input(request: KeypadRequest, session_id: str = Depends(validate_session_id)):
    """Aadhaar KYC: append a digit to the entered number, or clear it"""
    session_data = _get_session(session_id)
    controller: WizardController = session_data["controller"]

    if controller.current_step != WizardStep.NATIONAL_ID_ENTRY:
        raise ActionNotAllowed("keypad", int(controller.current_step))

    if request.clear:
        controller.clear_identifier()
    elif request.digit is not None:
        controller.record_identifier(press_keypad(controller.record.document_identifier, request.digit))
    else:
        raise HTTPException(status_code=422, detail="Provide a digit or set clear")
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/capture", response_model=WizardResponse)
async def capture_face(session_id: str = Depends(validate_session_id)):
    """Face KYC: confirm the capture and continue to completion"""
    session_data = _get_session(session_id)
    session_data["controller"].capture_face()
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/instructions", response_model=WizardResponse)
async def hear_instructions(session_id: str = Depends(validate_session_id)):
    session_data = _get_session(session_id)
    session_data["controller"].hear_instructions()
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/advance", response_model=WizardResponse)
async def advance(request: AdvanceRequest, session_id: str = Depends(validate_session_id)):
    """Move to another screen; only the transitions in the step catalog are accepted"""
    session_data = _get_session(session_id)
    controller: WizardController = session_data["controller"]
    controller.advance(request.target_step)
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/restart", response_model=WizardResponse)
async def restart(session_id: str = Depends(validate_session_id)):
    """Reset a session to the splash screen with an empty record"""
    session_data = _get_session(session_id)
    session_data["controller"].restart()

    logger.info(f"Session reset: {session_id}")
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/ask", response_model=WizardResponse)
async def ask(request: QueryRequest, session_id: str = Depends(validate_session_id)):
    """Answer a help question from the knowledge base"""
    session_data = _get_session(session_id)
    session_data["controller"].ask(request.query)
    return _respond(session_id, session_data)

@router.post("/session/{session_id}/listen", response_model=WizardResponse)
async def listen(session_id: str = Depends(validate_session_id)):
    """Fill the help question from voice input"""
    session_data = _get_session(session_id)
    await session_data["controller"].listen_for_query()
    return _respond(session_id, session_data)

# -------------------------------------------------------------------------------------------------
# CONNECTIVITY
# -------------------------------------------------------------------------------------------------

@router.get("/connectivity", response_model=ConnectivityResponse)
async def get_connectivity(connectivity: ConnectivitySignal = Depends(get_connectivity_signal)):
    return ConnectivityResponse(online=connectivity.online, subscribed_sessions=connectivity.subscriber_count)

@router.post("/connectivity", response_model=ConnectivityResponse)
async def set_connectivity(
    request: ConnectivityRequest,
    connectivity: ConnectivitySignal = Depends(get_connectivity_signal)
):
    """Report an online/offline change; every live session sees it"""
    connectivity.set_online(request.online)
    return ConnectivityResponse(online=connectivity.online, subscribed_sessions=connectivity.subscriber_count)
