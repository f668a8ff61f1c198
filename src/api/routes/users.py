"""User API routes (directory, signup, login).

Endpoints:
- GET /api/users: List users
- POST /api/users/signup: Register and log in (multipart with image)
- POST /api/users/login: Log in
"""

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from pydantic import EmailStr

from api.dependencies import get_token_service, get_user_repo
from api.middleware.image_upload import intake_image, release_image
from api.models import AuthResponse, LoginRequest, UserListEnvelope, UserResponse
from port.user_repository import UserRepository
from services import auth_service
from services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserListEnvelope)
def get_all_users(repo: UserRepository = Depends(get_user_repo)):
    """Get list of all users, without passwords."""
    users = auth_service.list_users(repo)
    return UserListEnvelope(users=[UserResponse.from_domain(u) for u in users])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    request: Request,
    image_path: str = Depends(intake_image),
    name: str = Form(..., min_length=2),
    email: EmailStr = Form(...),
    password: str = Form(..., min_length=6),
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a new user and log them in."""
    result = auth_service.register(
        repo, tokens,
        name=name,
        email=email.lower(),
        password=password,
        image=image_path,
        on_created=lambda _user: release_image(request),
    )
    return AuthResponse.from_domain(result)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """Log in an existing user."""
    result = auth_service.login(repo, tokens, body.email, body.password)
    return AuthResponse.from_domain(result)
