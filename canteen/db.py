from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from canteen.core.config import get_settings
from canteen.models.base import Base

settings = get_settings()

DATABASE_URL = settings.database_url
if not DATABASE_URL:
    raise ValueError("DATABASE_URL is not set!")

# Create engine
engine = create_async_engine(DATABASE_URL, echo=settings.db_echo, pool_pre_ping=True)

# Async session maker
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# Dependency
async def get_db():
    async with async_session() as session:
        yield session


async def create_db_and_tables(bind=None):
    import canteen.models  # registers every table on Base.metadata

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

