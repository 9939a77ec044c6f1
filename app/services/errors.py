from typing import Optional

import httpx


class UpstreamError(Exception):
    """The inference provider failed or answered with something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def upstream_error_from_response(resp: httpx.Response) -> UpstreamError:
    """
    Build an UpstreamError from a non-2xx provider response, preferring the
    provider's own ``{"error": {"message": ...}}`` text.
    """
    message = ""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict):
            message = err.get("message") or ""
        elif isinstance(err, str):
            message = err
    if not message:
        message = f"{resp.status_code} {resp.reason_phrase}".strip()
    return UpstreamError(message, status_code=resp.status_code)
