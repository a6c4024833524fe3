from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.api.deps import get_now
from canteen.auth.dependencies import get_current_admin_user
from canteen.core.config import get_settings
from canteen.crud import menu as menu_crud
from canteen.crud import report as report_crud
from canteen.crud.report import CouponFilters
from canteen.db import get_db
from canteen.models.coupon.coupon import CouponStatus
from canteen.models.menu.menu_item import DayOfWeek, MealType
from canteen.schemas.coupon import CouponList, CouponRead
from canteen.schemas.menu import MenuItemList, MenuItemRead
from canteen.schemas.report import TodaySummary
from canteen.services.cutoff import upcoming_meal

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/verify-token")
async def verify_token(user=Depends(get_current_admin_user)):
    return {"success": True, "message": "Token is valid."}


@router.get("/summary/today", response_model=TodaySummary)
async def todays_summary(
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    user=Depends(get_current_admin_user),
):
    """Active and Pending coupon counts for each meal served today"""
    today = now.date()
    summary = await report_crud.summary_for_today(db, today)
    return TodaySummary(date=today.isoformat(), summary=summary, upcoming_meal=upcoming_meal(now))


@router.get("/coupons", response_model=CouponList)
async def list_coupons(
    search: Optional[str] = None,
    order_id: Optional[str] = Query(None, alias="orderId"),
    name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    meal_type: Optional[MealType] = Query(None, alias="mealType"),
    status: Optional[CouponStatus] = None,
    meal_date: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_admin_user),
):
    filters = CouponFilters(
        search=search,
        order_id=order_id,
        name=name,
        email=email,
        phone=phone,
        meal_type=meal_type,
        status=status,
        meal_date=meal_date,
    )
    coupons = await report_crud.search_coupons(db, filters, page_size=get_settings().search_page_size)
    return CouponList(coupons=[CouponRead.model_validate(c) for c in coupons])


@router.get("/menu/current", response_model=MenuItemList)
async def current_menu(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_admin_user),
):
    items = await menu_crud.list_active_items(db)
    return MenuItemList(menu=[MenuItemRead.model_validate(i) for i in items])


@router.get("/menu/history", response_model=MenuItemList)
async def menu_history(
    day: DayOfWeek,
    meal_type: MealType = Query(..., alias="mealType"),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_admin_user),
):
    """Every published version of one day/meal slot, oldest first"""
    items = await menu_crud.list_history(db, day, meal_type)
    return MenuItemList(menu=[MenuItemRead.model_validate(i) for i in items])
