"""Tests for the transcription client."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from app.services.errors import UpstreamError
from app.services.stt_service import STTService


def _service(handler) -> STTService:
    return STTService(
        api_key="test-key",
        base_url="https://groq.test/openai/v1",
        model_name="whisper-large-v3-turbo",
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    path = tmp_path / "clip.webm"
    path.write_bytes(b"fake-audio")
    return path


async def test_transcribe_posts_multipart_with_model(audio_file: Path) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"text": "transcribed audio"})

    text = await _service(handler).transcribe_file(audio_file)

    assert text == "transcribed audio"
    request = requests[0]
    assert str(request.url) == "https://groq.test/openai/v1/audio/transcriptions"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    body = request.read()
    assert b'name="model"' in body
    assert b"whisper-large-v3-turbo" in body
    assert b'filename="clip.webm"' in body
    assert b"fake-audio" in body


async def test_missing_text_yields_empty_string(audio_file: Path) -> None:
    text = await _service(lambda request: httpx.Response(200, json={})).transcribe_file(audio_file)
    assert text == ""


async def test_provider_error_raises(audio_file: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"message": "file must be one of flac, mp3"}})

    with pytest.raises(UpstreamError, match="file must be one of"):
        await _service(handler).transcribe_file(audio_file)
