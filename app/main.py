from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from .routers import wizard
from .models import ErrorResponse, HealthResponse
from .dependencies import get_app_settings, get_connectivity_signal
from orchestrator.exceptions import ActionNotAllowed, InvalidInput, InvalidTransition, UnsupportedCapability

settings = get_app_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Starting {settings.app_name} server...")
    yield
    # Shutdown
    for session_data in wizard.active_sessions.values():
        session_data["controller"].close()
    wizard.active_sessions.clear()
    logger.info(f"Shutting down {settings.app_name} server...")

app = FastAPI(
    title=settings.app_name,
    description="Guided, voice-assisted KYC wizard for low-literacy and low-connectivity users",
    version=settings.app_version,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(wizard.router, prefix="/api/v1", tags=["wizard"])

def _session_id(request: Request):
    return request.path_params.get("session_id")

def _error(status_code: int, error: str, exc: Exception, request: Request, notice: str = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=str(exc), notice=notice, session_id=_session_id(request))
    return JSONResponse(status_code=status_code, content=body.model_dump())

# Error handlers
@app.exception_handler(InvalidTransition)
async def invalid_transition_handler(request: Request, exc: InvalidTransition):
    return _error(409, "invalid_transition", exc, request)

@app.exception_handler(ActionNotAllowed)
async def action_not_allowed_handler(request: Request, exc: ActionNotAllowed):
    return _error(409, "action_not_allowed", exc, request)

@app.exception_handler(UnsupportedCapability)
async def unsupported_capability_handler(request: Request, exc: UnsupportedCapability):
    return _error(501, "unsupported_capability", exc, request, notice=exc.notice)

@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return _error(422, "invalid_input", exc, request)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Global exception: {str(exc)}")
    body = ErrorResponse(error="internal_error", detail="Internal server error", session_id=_session_id(request))
    return JSONResponse(status_code=500, content=body.model_dump())

@app.get("/")
async def read_root():
    return {"service": settings.app_name, "version": settings.app_version, "api": "/api/v1"}

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        active_sessions=len(wizard.active_sessions),
        online=get_connectivity_signal().online,
        service=settings.app_name
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
