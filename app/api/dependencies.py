"""FastAPI dependencies resolving the objects wired into ``app.state`` by ``create_app``."""

from fastapi import Request

from app.services.llm_service import LLMService
from app.services.stt_service import STTService
from app.utils.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_llm_service(request: Request) -> LLMService:
    return request.app.state.llm_service


def get_stt_service(request: Request) -> STTService:
    return request.app.state.stt_service
