import os
import asyncio
import time
import secrets
import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from auth import AUTH, require

logger = logging.getLogger(__name__)

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
MAX_UPLOAD_BYTES = 50 * 1024 * 1024
CHUNK_SIZE = 1024 * 1024

ALLOWED_EXTENSIONS = {
    ".jpeg", ".jpg", ".png", ".gif", ".webp", ".svg",
    ".pdf", ".html", ".htm",
    ".mp4", ".mov", ".avi", ".wmv", ".mpeg",
    ".mp3", ".wav", ".ogg",
}
ALLOWED_MIME_PREFIXES = ("image/", "video/", "audio/", "application/pdf", "text/html")


def is_allowed(filename: str, content_type: Optional[str]) -> bool:
    """Accept when either the extension or the declared MIME type is on the list."""
    ext = os.path.splitext(filename or "")[1].lower()
    if ext in ALLOWED_EXTENSIONS:
        return True
    return bool(content_type) and content_type.lower().startswith(ALLOWED_MIME_PREFIXES)


def unique_name(filename: str) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}{ext}"


def upload_router(upload_dir: str = UPLOAD_DIR, level: str = AUTH) -> APIRouter:
    router = APIRouter(prefix="/upload", tags=["upload"])

    @router.post("", response_class=PlainTextResponse, dependencies=require(level))
    async def upload_file(file: Optional[UploadFile] = File(None)):
        if file is None or not file.filename:
            raise HTTPException(status_code=400, detail="No file uploaded")
        if not is_allowed(file.filename, file.content_type):
            raise HTTPException(
                status_code=415,
                detail="File type not supported. Allowed: images, videos, audio, HTML, and PDF.",
            )

        await asyncio.to_thread(os.makedirs, upload_dir, exist_ok=True)
        name = unique_name(file.filename)
        dest = os.path.join(upload_dir, name)
        size = 0
        out = await asyncio.to_thread(open, dest, "wb")
        try:
            try:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > MAX_UPLOAD_BYTES:
                        raise HTTPException(status_code=413, detail="File too large. Max size is 50MB.")
                    await asyncio.to_thread(out.write, chunk)
            finally:
                await asyncio.to_thread(out.close)
        except BaseException:
            # no partial files under the static mount
            os.remove(dest)
            raise

        logger.info("Stored upload %s (%d bytes)", name, size)
        return f"/uploads/{name}"

    return router
