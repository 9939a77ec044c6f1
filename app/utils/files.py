import time
import uuid
import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional
from fastapi import UploadFile

from app.utils.logger import get_logger

log = get_logger("files")

DEFAULT_AUDIO_SUFFIX = ".webm"


def upload_filename(original: Optional[str]) -> str:
    """
    Build a stored filename: millisecond timestamp, a random hex token and the
    original extension (".webm" when the upload has none).
    """
    suffix = Path(original or "").suffix or DEFAULT_AUDIO_SUFFIX
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{suffix}"


async def write_upload(file: UploadFile, dest: Path) -> None:
    """
    Write the uploaded bytes to dest, off the event loop.
    """
    data = await file.read()
    await asyncio.to_thread(dest.write_bytes, data)
    log.debug("Stored upload %s (%d bytes) at %s", file.filename, len(data), dest)


def remove_file(path: Path) -> None:
    """Best-effort delete; failures are logged, not raised."""
    try:
        if path.exists():
            path.unlink()
    except OSError:
        log.exception("Failed to remove temporary file %s", path)


@asynccontextmanager
async def temporary_upload(file: UploadFile, folder: Path) -> AsyncIterator[Path]:
    """
    Store an upload for the duration of the block and remove it on exit,
    whether the block returns or raises.
    """
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / upload_filename(file.filename)
    try:
        await write_upload(file, path)
        yield path
    finally:
        remove_file(path)
