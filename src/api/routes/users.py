"""User profile CRUD routes.

Endpoints (all require a bearer token):
- GET /users: List users
- GET /users/profile, PATCH /users/profile: Current user's profile
- GET /users/{id}, PATCH /users/{id}, DELETE /users/{id}: Profile by id
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_user_repo
from api.models import UpdateUserRequest, UserResponse
from api.security import get_current_user_id
from domain.model.errors import NotFoundError
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_current_user_id)])


def _update(repo: UserRepository, user_id: str, request: UpdateUserRequest) -> UserResponse:
    try:
        user = user_service.update_user(
            repo,
            user_id,
            name=request.name,
            profile_picture=request.profile_picture,
            is_active=request.is_active,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    logger.info("User updated", extra={
        "userId": user_id,
        "fields": sorted(request.model_dump(exclude_none=True)),
    })
    return UserResponse.from_domain(user)


@router.get("", response_model=list[UserResponse])
def list_users(repo: UserRepository = Depends(get_user_repo)):
    return [UserResponse.from_domain(u) for u in user_service.list_users(repo)]


@router.get("/profile", response_model=UserResponse)
def get_my_profile(
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    try:
        return UserResponse.from_domain(user_service.get_user(repo, user_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/profile", response_model=UserResponse)
def update_my_profile(
    request: UpdateUserRequest,
    user_id: str = Depends(get_current_user_id),
    repo: UserRepository = Depends(get_user_repo),
):
    return _update(repo, user_id, request)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    try:
        return UserResponse.from_domain(user_service.get_user(repo, user_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    request: UpdateUserRequest,
    repo: UserRepository = Depends(get_user_repo),
):
    return _update(repo, user_id, request)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(user_id: str, repo: UserRepository = Depends(get_user_repo)):
    try:
        user_service.remove_user(repo, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    logger.info("User removed", extra={"userId": user_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
