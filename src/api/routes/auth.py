"""Authentication routes (register, login, me)."""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import (
    get_password_hasher,
    get_request_timeout,
    get_token_issuer,
    get_user_repo,
)
from api.errors import run_with_deadline
from api.models import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from api.security import get_current_claims
from domain.model.claims import Claims
from port.user_repository import UserRepository
from services import auth_service
from services.password_hasher import BcryptPasswordHasher
from services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: BcryptPasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
    timeout: float = Depends(get_request_timeout),
):
    """Register a new user.

    Returns:
        JWT token for the new user

    Raises:
        HTTPException: 409 Conflict if email already exists, 503 if the store is down
    """
    token = await run_with_deadline(
        auth_service.sign_up,
        request.to_registration(),
        repo=repo,
        hasher=hasher,
        issuer=issuer,
        timeout=timeout,
    )
    return AuthResponse(token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    hasher: BcryptPasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
    timeout: float = Depends(get_request_timeout),
):
    """Login user and return JWT token.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    token = await run_with_deadline(
        auth_service.login,
        request.to_credentials(),
        repo=repo,
        hasher=hasher,
        issuer=issuer,
        timeout=timeout,
    )
    return AuthResponse(token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(
    claims: Claims = Depends(get_current_claims),
    repo: UserRepository = Depends(get_user_repo),
    timeout: float = Depends(get_request_timeout),
):
    """Get the user the bearer token was issued to."""
    user = await run_with_deadline(auth_service.get_user, claims.subject_id, repo=repo, timeout=timeout)
    return UserResponse.from_domain(user)
