"""Place service: place CRUD with the place/creator link kept consistent.

Every place is listed in its creator's ``places``. Creating and deleting
a place touch both documents, so those writes run inside one
transaction: either both are visible or neither is.

Flow:
    create: geocode → load creator → [insert place + push id] → Place
    delete: load place → ownership check → [delete place + pull id] → drop image
"""

import logging

from domain.model.errors import NotFoundError, PermissionDeniedError, PersistenceError
from domain.model.place import Place
from port.geocoder import GeocoderPort
from port.image_store import ImageStorePort
from port.place_repository import PlaceRepository
from port.transaction import TransactionManager
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

PLACE_NOT_FOUND_MESSAGE = "Could not find a place for the provided id!"
USER_PLACES_NOT_FOUND_MESSAGE = "Could not find a place for the provided user id!"
CREATOR_NOT_FOUND_MESSAGE = "Could not find user for provided id."

CREATE_FAILED_MESSAGE = "Creating place failed, please try again."
UPDATE_FAILED_MESSAGE = "Something went wrong, could not update place!"
DELETE_FAILED_MESSAGE = "Something went wrong, could not delete the place!"


def get_place(repo: PlaceRepository, place_id: str) -> Place:
    try:
        place = repo.get_by_id(place_id)
    except PersistenceError as e:
        raise PersistenceError("Something went wrong, couldn't find the place.") from e
    if not place:
        raise NotFoundError(PLACE_NOT_FOUND_MESSAGE)
    return place


def list_user_places(repo: PlaceRepository, user_id: str) -> list[Place]:
    """Return the places created by a user.

    An empty result is reported as NotFoundError, the same as for a user
    that does not exist.
    """
    try:
        places = repo.find_by_creator(user_id)
    except PersistenceError as e:
        raise PersistenceError("Something went wrong, couldn't find the places by user id.") from e
    if not places:
        raise NotFoundError(USER_PLACES_NOT_FOUND_MESSAGE)
    return places


def create_place(
    places: PlaceRepository,
    users: UserRepository,
    transactions: TransactionManager,
    geocoder: GeocoderPort,
    *,
    title: str,
    description: str,
    address: str,
    image: str,
    creator_id: str,
) -> Place:
    """Create a place and link it to its creator in one transaction.

    Raises:
        GeocodeError: address could not be resolved (passed through as-is)
        NotFoundError: creator does not exist
        PersistenceError: either write failed; nothing was committed
    """
    location = geocoder.get_coordinates(address)

    place = Place.create(
        title=title,
        description=description,
        address=address,
        location=location,
        image=image,
        creator=creator_id,
    )

    try:
        user = users.get_by_id(creator_id)
    except PersistenceError as e:
        raise PersistenceError(CREATE_FAILED_MESSAGE) from e
    if not user:
        raise NotFoundError(CREATOR_NOT_FOUND_MESSAGE)

    try:
        with transactions.transaction() as session:
            places.create(place, session=session)
            users.add_place(user.id, place.id, session=session)
    except PersistenceError as e:
        logger.error("Place creation rolled back", extra={"placeId": place.id, "userId": user.id})
        raise PersistenceError(CREATE_FAILED_MESSAGE) from e

    logger.info("Place created", extra={"placeId": place.id, "userId": user.id})
    return place


def update_place(
    repo: PlaceRepository,
    place_id: str,
    title: str,
    description: str,
    caller_id: str,
) -> Place:
    """Change title and description. Only the creator may do this."""
    try:
        place = repo.get_by_id(place_id)
    except PersistenceError as e:
        raise PersistenceError(UPDATE_FAILED_MESSAGE) from e
    if not place:
        raise NotFoundError(PLACE_NOT_FOUND_MESSAGE)

    if not place.is_owned_by(caller_id):
        logger.warning("Rejected place edit by non-creator", extra={"placeId": place_id, "userId": caller_id})
        raise PermissionDeniedError("You are not allowed to edit this place!")

    try:
        updated = repo.update_details(place_id, title, description)
    except PersistenceError as e:
        raise PersistenceError(UPDATE_FAILED_MESSAGE) from e
    if not updated:
        raise NotFoundError(PLACE_NOT_FOUND_MESSAGE)

    logger.info("Place updated", extra={"placeId": place_id, "userId": caller_id})
    return updated


def delete_place(
    places: PlaceRepository,
    users: UserRepository,
    transactions: TransactionManager,
    images: ImageStorePort,
    place_id: str,
    caller_id: str,
) -> None:
    """Delete a place, unlink it from its creator, then drop its image.

    The image is removed only after the transaction commits; failing to
    remove it is logged and does not undo the deletion.
    """
    try:
        place = places.get_by_id(place_id)
    except PersistenceError as e:
        raise PersistenceError(DELETE_FAILED_MESSAGE) from e
    if not place:
        raise NotFoundError(PLACE_NOT_FOUND_MESSAGE)

    if not place.is_owned_by(caller_id):
        logger.warning("Rejected place delete by non-creator", extra={"placeId": place_id, "userId": caller_id})
        raise PermissionDeniedError("You are not allowed to delete this place!")

    try:
        with transactions.transaction() as session:
            if not places.delete(place.id, session=session):
                raise NotFoundError(PLACE_NOT_FOUND_MESSAGE)
            users.remove_place(place.creator, place.id, session=session)
    except PersistenceError as e:
        logger.error("Place deletion rolled back", extra={"placeId": place.id, "userId": caller_id})
        raise PersistenceError(DELETE_FAILED_MESSAGE) from e

    logger.info("Place deleted", extra={"placeId": place.id, "userId": caller_id})

    if not images.delete(place.image):
        logger.warning("Stored image left behind after place deletion", extra={
            "placeId": place.id,
            "path": place.image,
        })
