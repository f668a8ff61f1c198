"""Image intake for routes that accept a single ``image`` upload.

The stored path is recorded on ``request.state`` until the route hands it
over to a committed record. If the request fails first, the error
handlers in ``api.errors`` find it there and delete the file.
"""

from fastapi import Depends, File, Request, UploadFile

from api.dependencies import get_image_store
from port.image_store import ImageStorePort


def intake_image(
    request: Request,
    image: UploadFile = File(...),
    store: ImageStorePort = Depends(get_image_store),
) -> str:
    path = store.save(image.content_type, image.file)
    request.state.image_path = path
    request.state.image_store = store
    return path


def release_image(request: Request) -> None:
    """Mark the uploaded image as owned by a committed record."""
    request.state.image_path = None


def discard_uploaded_image(request: Request) -> bool:
    """Delete an image stored for this request that no record has claimed."""
    path = getattr(request.state, "image_path", None)
    store = getattr(request.state, "image_store", None)
    if not path or store is None:
        return False
    request.state.image_path = None
    return store.delete(path)
