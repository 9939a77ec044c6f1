"""Shared fixtures: settings pointing at a temp upload dir and mocked provider services."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from app.utils.config import Settings
from main import create_app

ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir: Path) -> Settings:
    return Settings(
        GROQ_API_KEY="test-key",
        GROQ_BASE_URL="https://groq.test/openai/v1",
        CHAT_MODEL="llama-3.3-70b-versatile",
        TRANSCRIPTION_MODEL="whisper-large-v3-turbo",
        EXPOSE_UPSTREAM_ERRORS=True,
        UPLOAD_DIR=upload_dir,
        TEMPLATES_DIR=ROOT / "templates",
    )


@pytest.fixture
def llm_service() -> MagicMock:
    service = MagicMock()
    service.query = AsyncMock(return_value="hi there")
    return service


@pytest.fixture
def stt_service() -> MagicMock:
    service = MagicMock()
    service.transcribe_file = AsyncMock(return_value="transcribed audio")
    return service


@pytest.fixture
def app(settings: Settings, llm_service: MagicMock, stt_service: MagicMock):
    return create_app(settings, llm_service=llm_service, stt_service=stt_service)


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
