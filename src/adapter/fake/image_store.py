"""In-memory implementation of ImageStorePort for testing."""

import uuid
from typing import BinaryIO

from adapter.storage.local_image_store import MIME_TYPES_MAP
from domain.model.errors import InvalidFileTypeError


class FakeImageStore:
    def __init__(self, fail_deletes: bool = False):
        self.files: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_deletes = fail_deletes

    def save(self, content_type: str | None, stream: BinaryIO) -> str:
        ext = MIME_TYPES_MAP.get(content_type or '')
        if not ext:
            raise InvalidFileTypeError("Invalid mime type!")
        path = f"uploads/images/{uuid.uuid1()}.{ext}"
        self.files[path] = stream.read()
        return path

    def put(self, path: str, content: bytes = b'img') -> str:
        """Seed a stored file directly."""
        self.files[path] = content
        return path

    def delete(self, path: str) -> bool:
        if self.fail_deletes or path not in self.files:
            return False
        del self.files[path]
        self.deleted.append(path)
        return True
