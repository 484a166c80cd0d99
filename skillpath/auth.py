"""Accounts: user manager, JWT backend and the Google OAuth client."""

import logging
from typing import Optional

from beanie import PydanticObjectId
from fastapi import Depends, Request
from fastapi_users import BaseUserManager, FastAPIUsers
from fastapi_users.authentication import AuthenticationBackend, BearerTransport, JWTStrategy
from fastapi_users_db_beanie import ObjectIDIDMixin
from httpx_oauth.clients.google import GoogleOAuth2

from .config import settings
from .db import get_user_db
from .schemas.users import User

logger = logging.getLogger(__name__)

google_oauth_client = GoogleOAuth2(
    settings.auth.google_client_id,
    settings.auth.google_client_secret.get_secret_value(),
)


class UserManager(ObjectIDIDMixin, BaseUserManager[User, PydanticObjectId]):
    reset_password_token_secret = settings.auth.secret_key.get_secret_value()
    verification_token_secret = settings.auth.secret_key.get_secret_value()

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info(f"User {user.id} has registered.")

    async def on_after_forgot_password(self, user: User, token: str, request: Optional[Request] = None):
        # Email delivery is handled outside this service
        logger.info(f"User {user.id} requested a password reset.")

    async def on_after_request_verify(self, user: User, token: str, request: Optional[Request] = None):
        logger.info(f"Verification requested for user {user.id}.")


async def get_user_manager(user_db=Depends(get_user_db)):
    yield UserManager(user_db)


bearer_transport = BearerTransport(tokenUrl="auth/jwt/login")


def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=settings.auth.secret_key.get_secret_value(),
        lifetime_seconds=settings.auth.token_lifetime_seconds,
    )


auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

fastapi_users = FastAPIUsers[User, PydanticObjectId](
    get_user_manager,
    [auth_backend],
)

current_active_user = fastapi_users.current_user(active=True)
