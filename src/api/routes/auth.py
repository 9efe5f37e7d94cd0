"""Authentication routes (register, login, Google sign-in, profile, logout)."""

import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from api.dependencies import get_oauth_client, get_token_issuer, get_user_repo
from api.models import AuthResponse, LoginRequest, MessageResponse, RegisterRequest, UserResponse
from api.security import get_current_user_id
from domain.model.errors import (
    AccountDeactivatedError,
    AuthenticationError,
    DomainError,
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
)
from port.oauth_client import OAuthClientPort
from port.user_repository import UserRepository
from services import auth_service
from services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Register a new local user.

    Raises:
        HTTPException: 409 Conflict if email already exists
    """
    try:
        result = auth_service.register(
            repo,
            issuer,
            email=request.email,
            password=request.password,
            name=request.name,
            profile_picture=request.profile_picture,
        )
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info("User registered", extra={"userId": result.user.id})
    return AuthResponse.from_result(result)


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Login with email and password and return a JWT.

    Raises:
        HTTPException: 401 if credentials are invalid or the account is deactivated
    """
    try:
        user = auth_service.validate_user(repo, request.email, request.password)
    except (InvalidCredentialsError, AccountDeactivatedError) as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    result = auth_service.login(repo, issuer, user)
    logger.info("User logged in", extra={"userId": user.id, "provider": user.auth_provider.value})
    return AuthResponse.from_result(result)


@router.get("/google")
async def google_login(request: Request, oauth: OAuthClientPort = Depends(get_oauth_client)):
    """Redirect to Google's consent screen."""
    return await oauth.authorize_redirect(request)


@router.get("/google/callback", name="google_callback")
async def google_callback(
    request: Request,
    oauth: OAuthClientPort = Depends(get_oauth_client),
    repo: UserRepository = Depends(get_user_repo),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Finish Google sign-in and hand the token to the frontend.

    Raises:
        HTTPException: 401 if the exchange fails, 409 if the email belongs to another account
    """
    try:
        identity = await oauth.fetch_identity(request)
        user = auth_service.validate_oauth_user(repo, identity)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    result = auth_service.login(repo, issuer, user)
    logger.info("User logged in", extra={"userId": user.id, "provider": user.auth_provider.value})

    frontend_url = request.app.state.settings.frontend_url
    query = urlencode({"token": result.access_token})
    return RedirectResponse(url=f"{frontend_url}/auth/callback?{query}", status_code=status.HTTP_302_FOUND)


@router.get("/profile", response_model=UserResponse)
def get_profile(
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get the authenticated user's profile."""
    try:
        user = auth_service.get_profile(repo, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserResponse.from_domain(user)


@router.post("/logout", response_model=MessageResponse)
def logout(user_id: str = Depends(get_current_user_id)):
    """Logout current user.

    Tokens are stateless, so the client discards its token.
    """
    logger.info("User logged out", extra={"userId": user_id})
    return MessageResponse(message="Logout successful")
