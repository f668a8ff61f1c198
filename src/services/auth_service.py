"""Auth service: user directory, registration and login.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API boundary maps to HTTP status codes.
Input shape (name length, email format, password length) is checked by
the request models before anything here runs.
"""

import logging
from typing import Callable, Optional

import bcrypt

from domain.model.errors import (
    DomainError,
    DuplicateError,
    InvalidCredentialsError,
    PersistenceError,
)
from domain.model.user import AuthResult, User
from port.user_repository import UserRepository
from services.token_service import TokenService

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
BCRYPT_MAX_PASSWORD_BYTES = 72

INVALID_CREDENTIALS_MESSAGE = "Email or password is invalid, please try again!"


def _password_bytes(password: str) -> bytes:
    # bcrypt reads at most 72 bytes and rejects longer input
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def _hash_password(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))


def list_users(repo: UserRepository) -> list[User]:
    """Return all users. Password hashes are never part of the result."""
    try:
        users = repo.list_all()
    except PersistenceError as e:
        raise PersistenceError("Fetching users failed, please try again.") from e
    for user in users:
        user.password_hash = None
    return users


def register(
    repo: UserRepository,
    tokens: TokenService,
    name: str,
    email: str,
    password: str,
    image: str,
    rounds: int = BCRYPT_ROUNDS,
    on_created: Optional[Callable[[User], None]] = None,
) -> AuthResult:
    """Register a new user and log them in.

    ``on_created`` runs as soon as the user is stored, before the token
    is issued.

    Raises:
        DuplicateError: email already registered
        PersistenceError: the store could not be read or written
        TokenIssuanceError: the user was stored but no token could be signed
    """
    try:
        existing = repo.get_by_email(email)
    except PersistenceError as e:
        raise PersistenceError("Signing up failed, please try again.") from e
    if existing:
        raise DuplicateError("User exist already, please login instead.")

    try:
        password_hash = _hash_password(password, rounds)
    except ValueError as e:
        logger.error("Password hashing failed", extra={"email": email})
        raise DomainError("Could not create user, please try again.") from e

    # create() raises DuplicateError itself if another signup won the race
    user = repo.create(name=name, email=email, password_hash=password_hash, image=image)
    if on_created:
        on_created(user)

    token = tokens.issue(user.id, user.email)
    logger.info("User registered", extra={"userId": user.id, "email": user.email})
    return AuthResult(user_id=user.id, email=user.email, token=token)


def login(repo: UserRepository, tokens: TokenService, email: str, password: str) -> AuthResult:
    """Authenticate by email and password.

    Unknown email and wrong password raise the same error with the same
    message, so a caller cannot probe which accounts exist.
    """
    try:
        user = repo.get_by_email(email)
    except PersistenceError as e:
        raise PersistenceError("Logging in failed, please try again.") from e

    if not user or not user.password_hash:
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    try:
        valid = _verify_password(password, user.password_hash)
    except ValueError as e:
        logger.error("Stored password hash is unreadable", extra={"userId": user.id})
        raise DomainError("Could not log you in, please check your credentials and try again.") from e
    if not valid:
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    token = tokens.issue(user.id, user.email)
    logger.info("User logged in", extra={"userId": user.id})
    return AuthResult(user_id=user.id, email=user.email, token=token)
