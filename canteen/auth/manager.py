import logging
import uuid
from typing import Optional

from fastapi import Request
from fastapi_users import BaseUserManager, UUIDIDMixin

from canteen.auth.config import auth_config
from canteen.models.user import User

logger = logging.getLogger(__name__)


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = auth_config.secret
    verification_token_secret = auth_config.secret

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info("Admin account registered: %s", user.email)

    async def on_after_login(self, user: User, request: Optional[Request] = None, response=None):
        logger.info("Admin login: %s", user.email)
