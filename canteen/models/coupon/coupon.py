from sqlalchemy import Column, String, Integer, Date, DateTime, Numeric, Enum, Index
from datetime import datetime
from canteen.models.base import Base, enum_values
from canteen.models.menu.menu_item import MealType
import enum


class OrderType(str, enum.Enum):
    DINE_IN = "Dine-In"
    TAKEAWAY = "Takeaway"


class CouponStatus(str, enum.Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    USED = "Used"
    EXPIRED = "Expired"


# The only legal moves. Used and Expired are terminal; nothing returns to Pending.
COUPON_TRANSITIONS = {
    CouponStatus.PENDING: frozenset({CouponStatus.ACTIVE}),
    CouponStatus.ACTIVE: frozenset({CouponStatus.USED, CouponStatus.EXPIRED}),
    CouponStatus.USED: frozenset(),
    CouponStatus.EXPIRED: frozenset(),
}


def can_transition(current: CouponStatus, target: CouponStatus) -> bool:
    return target in COUPON_TRANSITIONS.get(current, frozenset())


def statuses_leading_to(target: CouponStatus) -> frozenset:
    """Every status from which ``target`` may be reached in one step."""
    return frozenset(status for status, targets in COUPON_TRANSITIONS.items() if target in targets)


class Coupon(Base):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), nullable=False)

    meal_date = Column(Date, nullable=False)
    meal_type = Column(Enum(MealType, values_callable=enum_values, native_enum=False, length=16), nullable=False)

    # Snapshot pricing at time of order; menu items may be republished later
    price = Column(Numeric(10, 2), nullable=False)

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String(10), nullable=False)
    order_type = Column(
        Enum(OrderType, values_callable=enum_values, native_enum=False, length=16),
        default=OrderType.DINE_IN,
        nullable=False,
    )

    status = Column(
        Enum(CouponStatus, values_callable=enum_values, native_enum=False, length=16),
        default=CouponStatus.PENDING,
        nullable=False,
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    activated_at = Column(DateTime, nullable=True)
    redeemed_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_coupons_order", "order_id"),
        Index("idx_coupons_meal_date_status", "meal_date", "status"),
        Index("idx_coupons_created", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Coupon {self.id} order={self.order_id} {self.meal_date} {self.meal_type.value} {self.status.value}>"
