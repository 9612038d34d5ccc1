"""Upload storage helpers."""

import asyncio
import logging
import re
import uuid
from pathlib import Path
from typing import BinaryIO

from translatrix.core.errors import FileTooLargeError

logger = logging.getLogger(__name__)


def secure_filename(filename: str) -> str:
    """Sanitize a filename to prevent path traversal attacks.

    - Removes directory components
    - Replaces characters that aren't word characters, dash or dot
    - Limits length, keeping the extension
    - Falls back to a generated name if nothing usable is left
    """
    filename = Path(filename.replace("\\", "/")).name
    filename = re.sub(r"[^\w\-.]", "_", filename)
    filename = filename.strip(". ")
    filename = re.sub(r"[_.]+", lambda m: m.group(0)[0], filename)

    max_length = 200
    if len(filename) > max_length:
        name_part = Path(filename).stem[: max_length - 10]
        ext_part = Path(filename).suffix[:10]
        filename = f"{name_part}{ext_part}"

    if not filename or filename.startswith("."):
        filename = f"upload_{uuid.uuid4().hex[:8]}"

    return filename


def _save_with_limit(file_obj: BinaryIO, dest_path: Path, max_size: int) -> int:
    """Copy an upload to disk in chunks, enforcing ``max_size`` while reading.

    Clients can lie about Content-Length, so the limit is checked on the
    bytes actually read.

    Returns:
        Number of bytes written
    """
    chunk_size = 1024 * 1024
    total_read = 0

    with open(dest_path, "wb") as buffer:
        while True:
            chunk = file_obj.read(chunk_size)
            if not chunk:
                break
            total_read += len(chunk)
            if total_read > max_size:
                buffer.close()
                dest_path.unlink(missing_ok=True)
                raise FileTooLargeError(
                    "File too large",
                    details=f"Maximum size is {max_size // (1024 * 1024)}MB",
                )
            buffer.write(chunk)

    return total_read


async def save_upload(file_obj: BinaryIO, upload_dir: Path, filename: str, max_size: int) -> Path:
    """Store an upload under a unique temporary name.

    Raises:
        FileTooLargeError: If the upload exceeds ``max_size`` bytes
    """
    dest_path = upload_dir / f"temp_{uuid.uuid4().hex[:8]}_{secure_filename(filename)}"
    loop = asyncio.get_running_loop()
    size = await loop.run_in_executor(None, _save_with_limit, file_obj, dest_path, max_size)
    logger.debug(f"Saved upload {filename} ({size} bytes) to {dest_path.name}")
    return dest_path


def delete_file(path: Path) -> None:
    """Delete a temporary file, logging instead of raising on failure."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not delete temp file {path}: {e}")
