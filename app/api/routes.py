from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse, HTMLResponse
from pydantic import ValidationError

from app.api.dependencies import get_llm_service, get_settings, get_stt_service
from app.api.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
    TranscriptionResponse,
)
from app.services.llm_service import LLMService
from app.services.stt_service import STTService
from app.utils.config import Settings
from app.utils.files import temporary_upload
from app.utils.logger import get_logger

logger = get_logger("routes")

router = APIRouter()

GENERIC_ERROR = "Internal server error"
FALLBACK_INDEX = "<h1>Voice Chat Gateway</h1>"


def error_message(exc: Exception, settings: Settings) -> str:
    """Text placed in a 500 body: the exception's message, or a generic string."""
    if not settings.EXPOSE_UPSTREAM_ERRORS:
        return GENERIC_ERROR
    return str(exc) or GENERIC_ERROR


async def read_chat_message(request: Request) -> Optional[str]:
    """
    The ``message`` of a chat body, or None when the body is absent, not JSON,
    or carries no string message.
    """
    try:
        payload = ChatRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        return None
    return payload.message


@router.get("/", response_class=HTMLResponse)
async def serve_home(request: Request):
    settings: Settings = request.app.state.settings
    if (settings.TEMPLATES_DIR / "index.html").exists():
        logger.info("Serving index.html")
        return request.app.state.templates.TemplateResponse(request, "index.html")
    logger.warning("index.html not found in %s", settings.TEMPLATES_DIR)
    return HTMLResponse(FALLBACK_INDEX)


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    return HealthResponse(
        status="healthy",
        models={"chat": settings.CHAT_MODEL, "transcription": settings.TRANSCRIPTION_MODEL},
    )


@router.post("/chat", response_model=ChatResponse,
             responses={400: {"model": ChatResponse}, 500: {"model": ErrorResponse}},
             openapi_extra={"requestBody": {"content": {"application/json": {"schema": ChatRequest.model_json_schema()}}}})
async def chat(
    request: Request,
    llm: LLMService = Depends(get_llm_service),
    settings: Settings = Depends(get_settings),
):
    message = await read_chat_message(request)
    if not message:
        return JSONResponse(status_code=400, content={"reply": "Message is required"})

    try:
        reply = await llm.query(message)
        return ChatResponse(reply=reply)
    except Exception as e:
        logger.exception("Error in /chat")
        return JSONResponse(status_code=500, content={"error": error_message(e, settings)})


@router.post("/voice-to-text", response_model=TranscriptionResponse,
             responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def voice_to_text(
    audio: Optional[UploadFile] = File(default=None),
    stt: STTService = Depends(get_stt_service),
    settings: Settings = Depends(get_settings),
):
    if audio is None:
        return JSONResponse(status_code=400, content={"error": "Audio file is required."})

    try:
        async with temporary_upload(audio, settings.UPLOAD_DIR) as path:
            text = await stt.transcribe_file(path)
        return TranscriptionResponse(text=text or "")
    except Exception as e:
        logger.exception("Error in /voice-to-text")
        return JSONResponse(status_code=500, content={"error": error_message(e, settings)})
