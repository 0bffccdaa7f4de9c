"""Cover image storage on the local filesystem."""
from __future__ import annotations

import logging
import time
from datetime import datetime
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

logger = logging.getLogger(__name__)

# Stored extension is chosen by the validated type, never the client filename.
ALLOWED_IMAGE_TYPES = {"image/jpeg": ".jpg", "image/png": ".png", "image/webp": ".webp"}
_CHUNK = 64 * 1024


class UploadRejected(ValueError):
    """The uploaded file failed validation."""


async def save_cover(
    upload: UploadFile | None,
    upload_dir: str | Path,
    max_bytes: int,
    now: datetime | None = None,
) -> str | None:
    """Store ``upload`` under ``YYYY/MM/`` and return its relative path.

    Returns ``None`` when no file was sent.
    """
    if upload is None or not upload.filename:
        return None

    if upload.size is not None and upload.size > max_bytes:
        raise UploadRejected(f"image too large (max {max_bytes >> 20}MB)")

    content_type = upload.content_type or ""
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise UploadRejected(f"unsupported image type: {content_type} (allowed: jpeg, png, webp)")

    now = now or datetime.now()
    relative_dir = PurePosixPath(now.strftime("%Y"), now.strftime("%m"))
    target_dir = Path(upload_dir) / relative_dir
    target_dir.mkdir(parents=True, exist_ok=True)

    filename = f"{time.time_ns()}{ALLOWED_IMAGE_TYPES[content_type]}"
    target = target_dir / filename

    written = 0
    try:
        with target.open("wb") as dst:
            while chunk := await upload.read(_CHUNK):
                written += len(chunk)
                if written > max_bytes:
                    raise UploadRejected(f"image too large (max {max_bytes >> 20}MB)")
                dst.write(chunk)
    except UploadRejected:
        target.unlink(missing_ok=True)
        raise

    logger.info("Stored cover image %s (%d bytes)", target, written)
    return str(relative_dir / filename)


def discard_cover(upload_dir: str | Path, cover_path: str | None) -> None:
    """Remove a stored cover whose database write did not go through."""
    if not cover_path:
        return
    Path(upload_dir, cover_path).unlink(missing_ok=True)
    logger.info("Discarded orphaned cover image %s", cover_path)
