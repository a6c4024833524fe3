from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.api.deps import get_now
from canteen.auth.dependencies import get_current_admin_user
from canteen.crud import coupon as coupon_crud
from canteen.db import get_db
from canteen.schemas.coupon import CouponRead, CouponRedeemed

router = APIRouter(prefix="/coupons", tags=["Coupons"])


@router.post("/{coupon_id}/redeem", response_model=CouponRedeemed)
async def redeem_coupon(
    coupon_id: int,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    user=Depends(get_current_admin_user),
):
    coupon = await coupon_crud.redeem(db, coupon_id, now)
    return CouponRedeemed(message=f"Coupon {coupon_id} marked as used.", coupon=CouponRead.model_validate(coupon))


@router.get("/{coupon_id}", response_model=CouponRead)
async def coupon_status(
    coupon_id: int,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_admin_user),
):
    return await coupon_crud.get_coupon(db, coupon_id)
