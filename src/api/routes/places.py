"""Place API routes.

Endpoints:
- GET /api/places/{place_id}: Get a place
- GET /api/places/user/{user_id}: List places created by a user
- POST /api/places: Create a place (auth, multipart with image)
- PATCH /api/places/{place_id}: Edit title/description (auth, creator only)
- DELETE /api/places/{place_id}: Delete a place (auth, creator only)

Handlers are plain ``def`` so FastAPI runs them in its threadpool; a
slow store, geocoder or disk call only holds up its own request.
"""

import logging

from fastapi import APIRouter, Depends, Form, Request, status

from api.dependencies import (
    get_geocoder,
    get_image_store,
    get_place_repo,
    get_transaction_manager,
    get_user_repo,
)
from api.middleware.auth import require_auth
from api.middleware.image_upload import intake_image, release_image
from api.models import (
    MessageResponse,
    PlaceEnvelope,
    PlaceListEnvelope,
    PlaceResponse,
    UpdatePlaceRequest,
)
from domain.model.user import TokenClaims
from port.geocoder import GeocoderPort
from port.image_store import ImageStorePort
from port.place_repository import PlaceRepository
from port.transaction import TransactionManager
from port.user_repository import UserRepository
from services import place_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/places", tags=["places"])


@router.get("/user/{user_id}", response_model=PlaceListEnvelope)
def get_places_by_user_id(user_id: str, repo: PlaceRepository = Depends(get_place_repo)):
    """Retrieve all places for a given user id."""
    places = place_service.list_user_places(repo, user_id)
    return PlaceListEnvelope(places=[PlaceResponse.from_domain(p) for p in places])


@router.get("/{place_id}", response_model=PlaceEnvelope)
def get_place_by_id(place_id: str, repo: PlaceRepository = Depends(get_place_repo)):
    """Get a specific place by id."""
    place = place_service.get_place(repo, place_id)
    return PlaceEnvelope(place=PlaceResponse.from_domain(place))


@router.post("", response_model=PlaceEnvelope, status_code=status.HTTP_201_CREATED)
def create_place(
    request: Request,
    claims: TokenClaims = Depends(require_auth),
    image_path: str = Depends(intake_image),
    title: str = Form(..., min_length=2),
    description: str = Form(..., min_length=5),
    address: str = Form(..., min_length=1),
    places: PlaceRepository = Depends(get_place_repo),
    users: UserRepository = Depends(get_user_repo),
    transactions: TransactionManager = Depends(get_transaction_manager),
    geocoder: GeocoderPort = Depends(get_geocoder),
):
    """Create a new place owned by the caller.

    ``require_auth`` is declared before ``intake_image`` so an
    unauthenticated request never stores a file.
    """
    place = place_service.create_place(
        places, users, transactions, geocoder,
        title=title,
        description=description,
        address=address,
        image=image_path,
        creator_id=claims.user_id,
    )
    release_image(request)
    return PlaceEnvelope(place=PlaceResponse.from_domain(place))


@router.patch("/{place_id}", response_model=PlaceEnvelope)
def update_place(
    place_id: str,
    body: UpdatePlaceRequest,
    claims: TokenClaims = Depends(require_auth),
    repo: PlaceRepository = Depends(get_place_repo),
):
    """Update title and description of a place."""
    place = place_service.update_place(repo, place_id, body.title, body.description, claims.user_id)
    return PlaceEnvelope(place=PlaceResponse.from_domain(place))


@router.delete("/{place_id}", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
def delete_place(
    place_id: str,
    claims: TokenClaims = Depends(require_auth),
    places: PlaceRepository = Depends(get_place_repo),
    users: UserRepository = Depends(get_user_repo),
    transactions: TransactionManager = Depends(get_transaction_manager),
    images: ImageStorePort = Depends(get_image_store),
):
    """Delete a place by id."""
    place_service.delete_place(places, users, transactions, images, place_id, claims.user_id)
    return MessageResponse(message="Place was deleted, successfully.")
