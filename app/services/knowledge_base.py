import logging
import os
import time
from typing import IO

from app.core.config import settings

logger = logging.getLogger(__name__)


def ensure_upload_dir() -> str:
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    return settings.UPLOAD_DIR


def store_knowledge_base(file_stream: IO[bytes], original_name: str) -> tuple[str, str]:
    """
    Saves an uploaded knowledge base file and returns its stored name and text.

    Files are stored as '<epoch-ms>-<original name>' so repeated uploads of
    the same file never overwrite each other.
    """
    upload_dir = ensure_upload_dir()
    safe_name = os.path.basename(original_name or "knowledge-base.txt")
    filename = f"{int(time.time() * 1000)}-{safe_name}"
    path = os.path.join(upload_dir, filename)

    data = file_stream.read()
    content = data.decode("utf-8")
    with open(path, "wb") as f:
        f.write(data)
    logger.info("Stored knowledge base upload as %s (%d bytes)", filename, len(data))

    return filename, content
