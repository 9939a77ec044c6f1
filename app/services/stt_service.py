import asyncio
import mimetypes
from pathlib import Path
from typing import Optional

import httpx

from app.services.errors import UpstreamError, upstream_error_from_response


class STTService:
    def __init__(
        self,
        api_key: str,
        base_url: str,
        model_name: str = "whisper-large-v3-turbo",
        timeout: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.endpoint = base_url.rstrip("/") + "/audio/transcriptions"
        self.model_name = model_name
        self.timeout = timeout
        self.transport = transport

    async def transcribe_file(self, filepath: Path) -> str:
        """
        Transcribe a local audio file via the provider's transcription endpoint.
        The file is read in a thread to avoid blocking the event loop.
        Returns "" when the provider yields no text.
        """
        data = await asyncio.to_thread(filepath.read_bytes)
        content_type = mimetypes.guess_type(filepath.name)[0] or "application/octet-stream"
        files = {"file": (filepath.name, data, content_type)}
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), transport=self.transport) as client:
            resp = await client.post(self.endpoint, data={"model": self.model_name}, files=files, headers=headers)
            if resp.is_error:
                raise upstream_error_from_response(resp)
            try:
                body = resp.json()
            except ValueError as exc:
                raise UpstreamError("Malformed response from transcription API", resp.status_code) from exc

        if not isinstance(body, dict):
            return ""
        return body.get("text") or ""
