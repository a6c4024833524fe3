"""
Menu publication: atomically swap the active weekly menu.

Uploaded rows are loosely typed. They are converted into MenuRow values
first; only then, in one transaction, are the current items deactivated
and the new batch inserted under the next version number. If nothing in
the upload survives validation, the transaction never starts and the old
menu stays live.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.core.errors import TransactionFailure, ValidationError
from canteen.crud.menu import latest_version
from canteen.models.menu.menu_item import DayOfWeek, MealType, MenuItem

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class MenuRow:
    day_of_week: DayOfWeek
    meal_type: MealType
    description: str
    price: Decimal


def _parse_day(raw: Any) -> Optional[DayOfWeek]:
    text = str(raw or "").strip().capitalize()
    try:
        return DayOfWeek(text)
    except ValueError:
        return None


def _parse_meal(raw: Any) -> Optional[MealType]:
    text = str(raw or "").strip().capitalize()
    try:
        return MealType(text)
    except ValueError:
        return None


def _parse_price(raw: Any) -> Optional[Decimal]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        price = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    if not price.is_finite() or price <= 0:
        return None
    return price.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_row(day_of_week: Any, meal_type: Any, description: Any, price: Any) -> Optional[MenuRow]:
    """A MenuRow, or None if any field is unusable."""
    day = _parse_day(day_of_week)
    meal = _parse_meal(meal_type)
    text = str(description).strip() if description is not None else ""
    amount = _parse_price(price)
    if day is None or meal is None or not text or amount is None:
        return None
    return MenuRow(day_of_week=day, meal_type=meal, description=text, price=amount)


def validate_rows(rows: Iterable[Tuple[Any, Any, Any, Any]]) -> List[MenuRow]:
    """
    Keep the usable rows. A repeated (day, meal) slot keeps its last row so
    the batch never holds two active items for one slot.
    """
    by_slot: dict = {}
    for index, raw in enumerate(rows):
        if isinstance(raw, MenuRow):
            row = raw
        else:
            row = validate_row(*raw) if len(raw) == 4 else None
        if row is None:
            logger.warning("Dropping unusable menu row %d: %r", index, raw)
            continue
        slot = (row.day_of_week, row.meal_type)
        if slot in by_slot:
            logger.warning("Menu row %d replaces an earlier row for %s %s", index, slot[0].value, slot[1].value)
            del by_slot[slot]
        by_slot[slot] = row
    return list(by_slot.values())


async def publish_menu(db: AsyncSession, rows: Iterable) -> List[MenuItem]:
    """Replace the active menu with ``rows``. Raises ValidationError if none are usable."""
    menu_rows = validate_rows(rows)
    if not menu_rows:
        raise ValidationError("No valid menu items with descriptions found in the uploaded file.", field="file")

    try:
        version = await latest_version(db) + 1
        await db.execute(
            update(MenuItem)
            .where(MenuItem.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        items = [
            MenuItem(
                day_of_week=row.day_of_week,
                meal_type=row.meal_type,
                description=row.description,
                price=row.price,
                version=version,
                is_active=True,
            )
            for row in menu_rows
        ]
        db.add_all(items)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Menu publication rolled back; previous menu stays active: %s", exc)
        raise TransactionFailure("Failed to upload menu; the previous menu is still active") from exc

    logger.info("Published menu version %d with %d item(s)", version, len(items))
    return items
