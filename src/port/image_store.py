"""Port definition for uploaded image storage."""

from typing import BinaryIO, Protocol


class ImageStorePort(Protocol):
    def save(self, content_type: str | None, stream: BinaryIO) -> str:
        """Store an image under a fresh unique name and return its path.

        Raises InvalidFileTypeError or FileTooLargeError before anything is written.
        """
        ...

    def delete(self, path: str) -> bool:
        """Remove a stored image. Return False (and log) if it could not be removed."""
        ...
