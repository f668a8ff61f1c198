"""Local-disk implementation of ImageStorePort.

Images land in one flat directory under a generated name
(``<uuid1>.<ext>``) so the stored path contains no user input. The
directory is also mounted as static files by the API.
"""

import logging
import uuid
from pathlib import Path
from typing import BinaryIO

from domain.model.errors import FileTooLargeError, InvalidFileTypeError, PersistenceError

logger = logging.getLogger(__name__)

MIME_TYPES_MAP = {
    "image/png": "png",
    "image/jpg": "jpg",
    "image/jpeg": "jpeg",
}


class LocalImageStore:
    def __init__(self, upload_dir: str, max_bytes: int):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes

    def save(self, content_type: str | None, stream: BinaryIO) -> str:
        """Validate and write an uploaded image, returning its relative path.

        Nothing touches the disk unless the MIME type is allowed and the
        content fits under ``max_bytes``.
        """
        ext = MIME_TYPES_MAP.get(content_type or '')
        if not ext:
            logger.info("Rejected upload with invalid mime type", extra={"contentType": content_type})
            raise InvalidFileTypeError("Invalid mime type!")

        # One byte over the limit is enough to know the file is too large
        content = stream.read(self.max_bytes + 1)
        if len(content) > self.max_bytes:
            logger.info("Rejected oversized upload", extra={"maxBytes": self.max_bytes})
            raise FileTooLargeError(f"File is too large, maximum size is {self.max_bytes} bytes.")

        path = self.upload_dir / f"{uuid.uuid1()}.{ext}"
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            logger.error("Failed to write image", extra={"path": str(path), "error": str(e)})
            raise PersistenceError("Could not store the uploaded image.") from e

        logger.debug("Stored image", extra={"path": path.as_posix(), "size": len(content)})
        return path.as_posix()

    def delete(self, path: str) -> bool:
        target = Path(path)
        if target.resolve().parent != self.upload_dir.resolve():
            logger.warning("Refusing to delete file outside upload directory", extra={"path": path})
            return False
        try:
            target.unlink()
        except OSError as e:
            logger.warning("Failed to delete image", extra={"path": path, "error": str(e)})
            return False
        logger.debug("Deleted image", extra={"path": path})
        return True
