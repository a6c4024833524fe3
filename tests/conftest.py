"""Shared pytest fixtures: a fresh SQLite database per test, a pinned clock,
a published week of menus and an authenticated admin client."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from canteen.api.deps import get_now
from canteen.auth.admin import create_admin
from canteen.db import create_db_and_tables, get_db
from canteen.main import app
from canteen.models.coupon.coupon import Coupon, OrderType
from canteen.models.menu.menu_item import DayOfWeek, MealType
from canteen.services.intake import Selection, initiate_order
from canteen.services.publication import publish_menu

IST = ZoneInfo("Asia/Kolkata")

# 2026-10-19 is a Monday
MONDAY_8AM = datetime(2026, 10, 19, 8, 0, tzinfo=IST)

MEAL_PRICES = {"Breakfast": 40, "Lunch": 120, "Dinner": 100}

ADMIN_EMAIL = "admin@canteen.in"
ADMIN_PASSWORD = "correct-horse-battery"


def week_rows(prices: dict = MEAL_PRICES, label: str = "") -> list[tuple]:
    return [
        (day.value, meal, f"{label}{day.value} {meal.lower()} thali", price)
        for day in DayOfWeek
        for meal, price in prices.items()
    ]


async def count_coupons(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(Coupon.id)))
    return int(result.scalar_one())


@pytest.fixture
def now() -> datetime:
    return MONDAY_8AM


@pytest.fixture
async def engine(tmp_path):
    # writers queue on the database lock instead of failing with "database is locked"
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'canteen.db'}", connect_args={"timeout": 30}
    )
    await create_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def published_menu(db):
    return await publish_menu(db, week_rows())


@pytest.fixture
def place_order(db, now):
    """Book selections for a default valid customer and return the order_id."""

    async def _place(*selections: Selection, at: datetime = None, order_type: OrderType = OrderType.DINE_IN):
        return await initiate_order(
            db,
            customer_name="Asha Rao",
            customer_email="asha@example.com",
            customer_phone="9876543210",
            selections=list(selections),
            order_type=order_type,
            now=at or now,
        )

    return _place


@pytest.fixture
def wednesday_lunch() -> Selection:
    return Selection(day=DayOfWeek.WEDNESDAY, meal_type=MealType.LUNCH, quantity=2)


@pytest.fixture
async def client(session_factory, now):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: now
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_headers(client, db) -> dict:
    await create_admin(db, ADMIN_EMAIL, ADMIN_PASSWORD)
    response = await client.post(
        "/auth/jwt/login",
        data={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
