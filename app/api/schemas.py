from pydantic import BaseModel
from typing import Dict, Optional

class ChatRequest(BaseModel):
    message: Optional[str] = None

class ChatResponse(BaseModel):
    reply: str

class ErrorResponse(BaseModel):
    error: str

class TranscriptionResponse(BaseModel):
    text: str = ""

class HealthResponse(BaseModel):
    status: str
    models: Dict[str, str]
