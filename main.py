
import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates
from dotenv import load_dotenv
load_dotenv()

from app.api.routes import router
from app.services.llm_service import LLMService
from app.services.stt_service import STTService
from app.utils.config import ConfigError, Settings
from app.utils.logger import logger as log, setup_logging


# ---------------------- FastAPI Setup ----------------------
def create_app(
    settings: Optional[Settings] = None,
    llm_service: Optional[LLMService] = None,
    stt_service: Optional[STTService] = None,
) -> FastAPI:
    """
    Build the gateway. Settings are read from the environment when not given;
    a missing provider credential raises ConfigError before anything is served.
    Services default to the Groq-backed implementations and can be replaced
    (tests pass doubles here).
    """
    settings = (settings or Settings()).validate()
    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)

    app = FastAPI(title="Voice Chat Gateway")
    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=str(settings.TEMPLATES_DIR))
    app.state.llm_service = llm_service or LLMService(
        api_key=settings.GROQ_API_KEY,
        base_url=settings.GROQ_BASE_URL,
        model_name=settings.CHAT_MODEL,
        temperature=settings.CHAT_TEMPERATURE,
        timeout=settings.UPSTREAM_TIMEOUT_SEC,
    )
    app.state.stt_service = stt_service or STTService(
        api_key=settings.GROQ_API_KEY,
        base_url=settings.GROQ_BASE_URL,
        model_name=settings.TRANSCRIPTION_MODEL,
        timeout=settings.UPSTREAM_TIMEOUT_SEC,
    )

    app.include_router(router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


# ---------------------- Entrypoint ----------------------
def main() -> None:
    settings = Settings()
    setup_logging(settings.LOG_LEVEL)
    try:
        app = create_app(settings)
    except ConfigError as e:
        log.error("%s", e)
        sys.exit(1)

    import uvicorn
    log.info("Server running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
