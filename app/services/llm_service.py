# app/services/llm_service.py
"""
Chat-completion helper for the Groq OpenAI-compatible REST API.

Behavior:
 - Sends a single user turn to /chat/completions with a fixed model and temperature.
 - Returns the raw JSON response; reply extraction is a separate, ordered
   chain of extractors so schema drift upstream degrades to a placeholder.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx

from app.services.errors import UpstreamError, upstream_error_from_response
from app.utils.logger import get_logger

log = get_logger("llm_service")

FALLBACK_REPLY = "I couldn't generate a reply."


def _first_choice(response: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(response, dict):
        return None
    choices = response.get("choices")
    if not choices or not isinstance(choices, list):
        return None
    choice = choices[0]
    return choice if isinstance(choice, dict) else None


def _message_content(choice: Dict[str, Any]) -> Optional[str]:
    message = choice.get("message")
    if isinstance(message, dict):
        return message.get("content")
    return None


def _raw_message(choice: Dict[str, Any]) -> Optional[str]:
    message = choice.get("message")
    if isinstance(message, str):
        return message
    if message:
        return json.dumps(message)
    return None


def _choice_content(choice: Dict[str, Any]) -> Optional[str]:
    return choice.get("content")


# Tried in order; the first non-empty string wins.
REPLY_EXTRACTORS: List[Callable[[Dict[str, Any]], Optional[str]]] = [
    _message_content,
    _raw_message,
    _choice_content,
]


def extract_reply(response: Any, fallback: str = FALLBACK_REPLY) -> str:
    choice = _first_choice(response)
    if choice is None:
        return fallback
    for extractor in REPLY_EXTRACTORS:
        text = extractor(choice)
        if text and isinstance(text, str):
            return text
    return fallback


class LLMService:
    """
    Wrapper for non-streaming chat completions.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model_name: str = "llama-3.3-70b-versatile",
        temperature: float = 0.2,
        timeout: int = 60,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.endpoint = base_url.rstrip("/") + "/chat/completions"
        self.model_name = model_name
        self.temperature = temperature
        self.timeout = int(timeout or 60)
        self.transport = transport
        log.info("LLMService configured for model %s", model_name)

    async def complete(self, message: str) -> Dict[str, Any]:
        """
        Send one user-role turn upstream and return the decoded JSON response.
        Raises UpstreamError for non-2xx answers or undecodable bodies.
        """
        payload = {
            "model": self.model_name,
            "messages": [{"role": "user", "content": message}],
            "temperature": self.temperature,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), transport=self.transport) as client:
            resp = await client.post(self.endpoint, json=payload, headers=headers)
            if resp.is_error:
                raise upstream_error_from_response(resp)
            try:
                return resp.json()
            except ValueError as exc:
                raise UpstreamError("Malformed response from chat completion API", resp.status_code) from exc

    async def query(self, message: str) -> str:
        """
        Complete ``message`` and reduce the response to a reply string.
        """
        response = await self.complete(message)
        log.debug("/chat raw response: %s", response)
        return extract_reply(response)
