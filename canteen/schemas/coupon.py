from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from canteen.models.coupon.coupon import CouponStatus, OrderType
from canteen.models.menu.menu_item import MealType


class CouponRead(BaseModel):
    id: int
    order_id: str
    meal_date: date
    meal_type: MealType
    price: Decimal
    customer_name: str
    customer_email: str
    customer_phone: str
    order_type: OrderType
    status: CouponStatus
    created_at: datetime
    activated_at: Optional[datetime] = None
    redeemed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CouponRedeemed(BaseModel):
    success: bool = True
    message: str
    coupon: CouponRead


class CouponList(BaseModel):
    success: bool = True
    coupons: List[CouponRead]
