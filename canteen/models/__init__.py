from .base import Base
from .user import User
from .menu.menu_item import DayOfWeek, MealType, MenuItem
from .coupon.coupon import Coupon, CouponStatus, OrderType, COUPON_TRANSITIONS
