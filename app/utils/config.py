import os
from pathlib import Path
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()

# Repository root (app/utils/config.py -> ./)
ROOT = Path(__file__).resolve().parents[2]


class ConfigError(RuntimeError):
    """Raised when the gateway cannot start with the given configuration."""


def _env(name: str, default: str = ""):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_bool(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default).lower() in ("1", "true", "yes"))


@dataclass(frozen=True)
class Settings:
    # API Keys
    GROQ_API_KEY: str = _env("GROQ_API_KEY")

    # External endpoints & models
    GROQ_BASE_URL: str = _env("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    CHAT_MODEL: str = _env("CHAT_MODEL", "llama-3.3-70b-versatile")
    CHAT_TEMPERATURE: float = field(default_factory=lambda: float(os.getenv("CHAT_TEMPERATURE", 0.2)))
    TRANSCRIPTION_MODEL: str = _env("TRANSCRIPTION_MODEL", "whisper-large-v3-turbo")

    # Timeouts
    UPSTREAM_TIMEOUT_SEC: int = field(default_factory=lambda: int(os.getenv("UPSTREAM_TIMEOUT_SEC", 60)))

    # Error exposure
    EXPOSE_UPSTREAM_ERRORS: bool = _env_bool("EXPOSE_UPSTREAM_ERRORS", "true")

    # Server
    HOST: str = _env("HOST", "0.0.0.0")
    PORT: int = field(default_factory=lambda: int(os.getenv("PORT", 4000)))
    LOG_LEVEL: str = _env("LOG_LEVEL", "INFO")

    # Paths
    UPLOAD_DIR: Path = field(default_factory=lambda: Path(os.getenv("UPLOAD_DIR", "uploads")))
    TEMPLATES_DIR: Path = field(default_factory=lambda: Path(os.getenv("TEMPLATES_DIR", ROOT / "templates")))

    def validate(self) -> "Settings":
        if not self.GROQ_API_KEY:
            raise ConfigError("GROQ_API_KEY is not set in the environment.")
        return self
