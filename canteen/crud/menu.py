from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import case, func
from typing import Dict, List, Optional

from canteen.models.menu.menu_item import DayOfWeek, MealType, MenuItem

DAY_ORDER = case({day: idx for idx, day in enumerate(DayOfWeek)}, value=MenuItem.day_of_week)
MEAL_ORDER = case({meal: idx for idx, meal in enumerate(MealType)}, value=MenuItem.meal_type)


# publish_menu deactivates rows with a bulk UPDATE; reads refresh rows already in the session
async def list_active_items(db: AsyncSession) -> List[MenuItem]:
    """Active items ordered Monday..Sunday, then Breakfast, Lunch, Dinner"""
    result = await db.execute(
        select(MenuItem)
        .where(MenuItem.is_active.is_(True))
        .order_by(DAY_ORDER, MEAL_ORDER)
        .execution_options(populate_existing=True)
    )
    return result.scalars().all()


async def get_active_menu(db: AsyncSession) -> Dict[str, Dict[str, dict]]:
    """Current catalog grouped by day then meal type. Days with no items are absent."""
    menu: Dict[str, Dict[str, dict]] = {}
    for item in await list_active_items(db):
        menu.setdefault(item.day_of_week.value, {})[item.meal_type.value] = {
            "description": item.description,
            "price": item.price,
        }
    return menu


async def get_active_item(db: AsyncSession, day_of_week: DayOfWeek, meal_type: MealType) -> Optional[MenuItem]:
    result = await db.execute(
        select(MenuItem).where(
            MenuItem.day_of_week == day_of_week,
            MenuItem.meal_type == meal_type,
            MenuItem.is_active.is_(True),
        )
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def list_history(db: AsyncSession, day_of_week: DayOfWeek, meal_type: MealType) -> List[MenuItem]:
    """Every published version of one slot, oldest first"""
    result = await db.execute(
        select(MenuItem)
        .where(MenuItem.day_of_week == day_of_week, MenuItem.meal_type == meal_type)
        .order_by(MenuItem.version.asc(), MenuItem.id.asc())
        .execution_options(populate_existing=True)
    )
    return result.scalars().all()


async def latest_version(db: AsyncSession) -> int:
    result = await db.execute(select(func.coalesce(func.max(MenuItem.version), 0)))
    return int(result.scalar_one())
