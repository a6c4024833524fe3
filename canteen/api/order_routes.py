from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.api.deps import get_cutoffs, get_now
from canteen.auth.dependencies import get_current_admin_user
from canteen.core.config import get_settings
from canteen.crud import coupon as coupon_crud
from canteen.db import get_db
from canteen.schemas.order import OrderConfirmed, OrderInitiate, OrderInitiated, OrderReceipt
from canteen.services import intake
from canteen.services.intake import Selection

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("/initiate", response_model=OrderInitiated, status_code=status.HTTP_201_CREATED)
async def initiate_order(
    payload: OrderInitiate,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    cutoffs: dict = Depends(get_cutoffs),
):
    """Book every selected meal as Pending coupons under one new order id"""
    selections = [
        Selection(day=s.day, meal_type=s.meal_type, quantity=s.quantity, price=s.price)
        for s in payload.selections
    ]
    order_id = await intake.initiate_order(
        db,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        customer_phone=payload.customer_phone,
        selections=selections,
        order_type=payload.order_type,
        now=now,
        cutoffs=cutoffs,
        max_quantity=get_settings().max_quantity_per_selection,
    )
    return OrderInitiated(order_id=order_id)


@router.get("/{order_id}", response_model=OrderReceipt)
async def get_receipt(order_id: str, db: AsyncSession = Depends(get_db)):
    """Receipt for an order, straight from the coupon rows"""
    return await intake.get_order_receipt(db, order_id)


@router.post("/{order_id}/confirm", response_model=OrderConfirmed)
async def confirm_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    now: datetime = Depends(get_now),
    user=Depends(get_current_admin_user),
):
    """Payment acknowledged: activate all of the order's coupons"""
    activated = await coupon_crud.confirm_order(db, order_id, now)
    return OrderConfirmed(order_id=order_id, activated=activated)
