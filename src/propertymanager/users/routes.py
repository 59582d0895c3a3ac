"""Read-only user lookup routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from .models import UserExistsResponse, UserResponse
from .service import UserService

LOGGER = logging.getLogger(__name__)


def get_user_service(request: Request) -> UserService:
    """Return the UserService created during application startup."""
    return request.app.state.user_service


async def _get_user(user_service: UserService, username: str) -> UserResponse:
    user = await user_service.find_by_username(username)
    if user is None:
        LOGGER.debug("User lookup failed for username: %s", username)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserResponse.from_user(user)


def configure_users_router(router: APIRouter) -> APIRouter:
    """Configure the user lookup router.

    :param router: The APIRouter to configure
    :return: The configured APIRouter
    """

    @router.get("/{username}", response_model=UserResponse)
    async def get_user(
        username: str,
        user_service: Annotated[UserService, Depends(get_user_service)],
    ) -> UserResponse:
        return await _get_user(user_service, username)

    @router.get("/{username}/exists", response_model=UserExistsResponse)
    async def user_exists(
        username: str,
        user_service: Annotated[UserService, Depends(get_user_service)],
    ) -> UserExistsResponse:
        exists = await user_service.user_exists(username)
        return UserExistsResponse(username=username, exists=exists)

    return router
