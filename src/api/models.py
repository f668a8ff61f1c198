"""Pydantic models for API request/response."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from domain.model.place import Place
from domain.model.user import AuthResult, User


# ── Requests ─────────────────────────────────────────────────


class UpdatePlaceRequest(BaseModel):
    """Request model for editing a place."""
    title: str = Field(..., min_length=2)
    description: str = Field(..., min_length=5)


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


# ── Responses ────────────────────────────────────────────────


class LocationResponse(BaseModel):
    lat: float
    lng: float


class PlaceResponse(BaseModel):
    """Response model for a place."""
    id: str = Field(..., description="Place ID")
    title: str
    description: str
    image: str = Field(..., description="Stored image path, servable under /uploads/images")
    address: str
    location: LocationResponse
    creator: str = Field(..., description="ID of the user who created the place")

    @classmethod
    def from_domain(cls, place: Place) -> 'PlaceResponse':
        return cls(
            id=place.id,
            title=place.title,
            description=place.description,
            image=place.image,
            address=place.address,
            location=LocationResponse(lat=place.location.lat, lng=place.location.lng),
            creator=place.creator,
        )


class PlaceEnvelope(BaseModel):
    place: PlaceResponse


class PlaceListEnvelope(BaseModel):
    places: list[PlaceResponse]


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""
    id: str
    name: str
    email: str
    image: str
    places: list[str]

    @classmethod
    def from_domain(cls, user: User) -> 'UserResponse':
        return cls(id=user.id, name=user.name, email=user.email, image=user.image, places=user.places)


class UserListEnvelope(BaseModel):
    users: list[UserResponse]


class AuthResponse(BaseModel):
    """Response model for signup and login."""
    userId: str
    email: str
    token: str

    @classmethod
    def from_domain(cls, result: AuthResult) -> 'AuthResponse':
        return cls(userId=result.user_id, email=result.email, token=result.token)


class MessageResponse(BaseModel):
    message: str
