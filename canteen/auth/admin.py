import contextlib
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from canteen.auth.routes import get_user_db, get_user_manager
from canteen.models.user import User
from canteen.schemas.user import UserCreate

logger = logging.getLogger(__name__)

get_user_db_context = contextlib.asynccontextmanager(get_user_db)
get_user_manager_context = contextlib.asynccontextmanager(get_user_manager)


async def create_admin(session: AsyncSession, email: str, password: str) -> User:
    """Create an active superuser through the same manager the login route uses.

    Raises fastapi_users.exceptions.UserAlreadyExists for a taken email.
    """
    async with get_user_db_context(session) as user_db:
        async with get_user_manager_context(user_db) as user_manager:
            user = await user_manager.create(
                UserCreate(email=email, password=password, is_active=True, is_superuser=True, is_verified=True)
            )
    logger.info("Created admin %s", user.email)
    return user
