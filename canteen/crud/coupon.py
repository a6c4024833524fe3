import logging
from datetime import date, datetime
from typing import List

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from canteen.core.errors import Conflict, InvalidState, NotFound, TransactionFailure
from canteen.models.coupon.coupon import Coupon, CouponStatus, can_transition, statuses_leading_to
from canteen.utils.timezones import utc_naive

logger = logging.getLogger(__name__)


def ensure_transition(current: CouponStatus, target: CouponStatus) -> None:
    """Reject any status change that is not in COUPON_TRANSITIONS."""
    if not can_transition(current, target):
        raise InvalidState(f"Coupon cannot move from {current.value} to {target.value}")


def _may_become(target: CouponStatus):
    """WHERE clause matching the statuses COUPON_TRANSITIONS allows to move to ``target``."""
    return Coupon.status.in_(sorted(statuses_leading_to(target)))


async def get_coupon(db: AsyncSession, coupon_id: int) -> Coupon:
    result = await db.execute(
        select(Coupon).where(Coupon.id == coupon_id).execution_options(populate_existing=True)
    )
    coupon = result.scalar_one_or_none()
    if coupon is None:
        raise NotFound(f"Coupon {coupon_id} not found")
    return coupon


async def list_order_coupons(db: AsyncSession, order_id: str) -> List[Coupon]:
    result = await db.execute(
        select(Coupon)
        .where(Coupon.order_id == order_id)
        .order_by(Coupon.meal_date.asc(), Coupon.id.asc())
        .execution_options(populate_existing=True)
    )
    return result.scalars().all()


async def confirm_order(db: AsyncSession, order_id: str, now: datetime) -> int:
    """
    Pending -> Active for every coupon of an order (payment acknowledged).

    All-or-nothing: if any coupon already left Pending the whole call fails
    with InvalidState and nothing changes.
    """
    coupons = await list_order_coupons(db, order_id)
    if not coupons:
        raise NotFound(f"Order {order_id} not found")

    for coupon in coupons:
        ensure_transition(coupon.status, CouponStatus.ACTIVE)

    try:
        result = await db.execute(
            update(Coupon)
            .where(Coupon.order_id == order_id, _may_become(CouponStatus.ACTIVE))
            .values(status=CouponStatus.ACTIVE, activated_at=utc_naive(now))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != len(coupons):
            await db.rollback()
            raise Conflict(f"Order {order_id} changed while it was being confirmed")
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Confirming order %s rolled back: %s", order_id, exc)
        raise TransactionFailure("Could not confirm order; nothing was changed") from exc

    logger.info("Order %s confirmed: %d coupon(s) active", order_id, len(coupons))
    return len(coupons)


async def redeem(db: AsyncSession, coupon_id: int, now: datetime) -> Coupon:
    """
    Active -> Used with a single compare-and-set UPDATE.

    Two counters scanning the same coupon race on the WHERE clause; the
    loser sees zero affected rows and gets Conflict.
    """
    try:
        result = await db.execute(
            update(Coupon)
            .where(Coupon.id == coupon_id, _may_become(CouponStatus.USED))
            .values(status=CouponStatus.USED, redeemed_at=utc_naive(now))
            .execution_options(synchronize_session=False)
        )
        affected = result.rowcount
        if affected:
            await db.commit()
        else:
            await db.rollback()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Redeeming coupon %s rolled back: %s", coupon_id, exc)
        raise TransactionFailure("Could not redeem coupon; nothing was changed") from exc

    coupon = await get_coupon(db, coupon_id)
    if not affected:
        logger.warning("Rejected redemption of coupon %s in status %s", coupon_id, coupon.status.value)
        raise InvalidState(f"Coupon {coupon_id} is not active (status: {coupon.status.value})")

    logger.info("Coupon %s redeemed", coupon_id)
    return coupon


async def expire_stale_coupons(db: AsyncSession, today: date) -> int:
    """Active coupons whose meal_date has passed become Expired. Returns the count."""
    try:
        result = await db.execute(
            update(Coupon)
            .where(_may_become(CouponStatus.EXPIRED), Coupon.meal_date < today)
            .values(status=CouponStatus.EXPIRED)
            .execution_options(synchronize_session=False)
        )
        expired = result.rowcount
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Expiry sweep rolled back: %s", exc)
        raise TransactionFailure("Expiry sweep failed; nothing was changed") from exc

    logger.info("Expiry sweep for %s: %d coupon(s) expired", today.isoformat(), expired)
    return expired
