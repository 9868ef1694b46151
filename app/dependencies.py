from fastapi import HTTPException
from functools import lru_cache
import re
import logging

from config.settings import Settings, get_settings
from tools.connectivity import ConnectivitySignal

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = r'^(api|cli)-session-[a-f0-9\-]{36}$'

@lru_cache
def get_app_settings() -> Settings:
    """Settings resolved once for the lifetime of the process"""
    return get_settings()

@lru_cache
def get_connectivity_signal() -> ConnectivitySignal:
    """
    The process-wide connectivity flag shared by every session
    """
    return ConnectivitySignal(online=get_app_settings().initially_online)

async def validate_session_id(session_id: str) -> str:
    """
    Validate session ID format and basic requirements
    """
    if not session_id:
        raise HTTPException(status_code=400, detail="Session ID is required")

    if len(session_id) < 10:
        raise HTTPException(status_code=400, detail="Invalid session ID format")

    # Validate session ID pattern (api-session-uuid or cli-session-uuid)
    if not re.match(SESSION_ID_PATTERN, session_id):
        raise HTTPException(status_code=400, detail="Invalid session ID format")

    return session_id
