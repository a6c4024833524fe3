from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from canteen.models.coupon.coupon import Coupon, CouponStatus
from canteen.models.menu.menu_item import MealType

SUMMARY_STATUSES = (CouponStatus.ACTIVE, CouponStatus.PENDING)


@dataclass
class CouponFilters:
    search: Optional[str] = None
    order_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    meal_type: Optional[MealType] = None
    status: Optional[CouponStatus] = None
    meal_date: Optional[date] = None


async def summary_for_today(db: AsyncSession, today: date) -> Dict[str, Dict[str, int]]:
    """Active/Pending coupon counts per meal type for meals served on ``today``."""
    summary = {meal.value: {status.value: 0 for status in SUMMARY_STATUSES} for meal in MealType}

    result = await db.execute(
        select(Coupon.meal_type, Coupon.status, func.count(Coupon.id))
        .where(Coupon.meal_date == today, Coupon.status.in_(SUMMARY_STATUSES))
        .group_by(Coupon.meal_type, Coupon.status)
    )
    for meal_type, status, count in result.all():
        summary[meal_type.value][status.value] = int(count or 0)
    return summary


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, term: str):
    """Case-insensitive substring match; % and _ in the term are literal."""
    return column.ilike(f"%{_escape_like(term.strip())}%", escape="\\")


async def search_coupons(db: AsyncSession, filters: CouponFilters, page_size: int = 200) -> List[Coupon]:
    """
    Filtered coupon search, newest first, at most ``page_size`` rows.

    Pending coupons are unpaid checkouts rather than purchases, so they are
    left out unless the caller filters on status=Pending.
    """
    query = select(Coupon)

    if filters.status is not None:
        query = query.where(Coupon.status == filters.status)
    else:
        query = query.where(Coupon.status != CouponStatus.PENDING)

    if filters.search and filters.search.strip():
        query = query.where(
            or_(
                _contains(Coupon.order_id, filters.search),
                _contains(Coupon.customer_name, filters.search),
                _contains(Coupon.customer_email, filters.search),
                _contains(Coupon.customer_phone, filters.search),
            )
        )
    if filters.order_id:
        query = query.where(_contains(Coupon.order_id, filters.order_id))
    if filters.name:
        query = query.where(_contains(Coupon.customer_name, filters.name))
    if filters.email:
        query = query.where(_contains(Coupon.customer_email, filters.email))
    if filters.phone:
        query = query.where(_contains(Coupon.customer_phone, filters.phone))
    if filters.meal_type is not None:
        query = query.where(Coupon.meal_type == filters.meal_type)
    if filters.meal_date is not None:
        query = query.where(Coupon.meal_date == filters.meal_date)

    query = query.order_by(Coupon.created_at.desc(), Coupon.id.desc()).limit(page_size)
    result = await db.execute(query)
    return result.scalars().all()
