"""
Order intake: turns a customer's checkout into Pending coupons.

Every check runs before the first write. A selection of quantity N becomes
N coupon rows sharing one order_id, and the whole batch commits once, so a
failed intake leaves nothing behind.
"""
import logging
import re
import uuid
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from canteen.core.errors import NotBookable, NotFound, TransactionFailure, ValidationError
from canteen.crud.coupon import list_order_coupons
from canteen.crud.menu import get_active_item
from canteen.models.coupon.coupon import Coupon, CouponStatus, OrderType
from canteen.models.menu.menu_item import DayOfWeek, MealType, MenuItem
from canteen.services.cutoff import DEFAULT_CUTOFFS, is_bookable, next_occurrence

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[6-9]\d{9}$")

MAX_QUANTITY_PER_SELECTION = 20


@dataclass
class Selection:
    day: DayOfWeek
    meal_type: MealType
    quantity: int = 1
    price: Optional[Decimal] = None  # unit price the customer was shown, if sent


@dataclass
class CustomerDetails:
    name: str
    email: str
    phone: str


def validate_customer(name: Optional[str], email: Optional[str], phone: Optional[str]) -> CustomerDetails:
    name = (name or "").strip()
    email = (email or "").strip()
    phone = (phone or "").strip()

    for field, value in (("customerName", name), ("customerEmail", email), ("customerPhone", phone)):
        if not value:
            raise ValidationError(f"{field} is required", field=field)

    if not EMAIL_RE.match(email):
        raise ValidationError("Please enter a valid email address", field="customerEmail")
    if not PHONE_RE.match(phone):
        raise ValidationError("Please enter a valid 10-digit contact number", field="customerPhone")

    return CustomerDetails(name=name, email=email, phone=phone)


async def _resolve_selections(
    db: AsyncSession,
    selections: Sequence[Selection],
    now: datetime,
    cutoffs: Mapping,
    max_quantity: int,
) -> List[MenuItem]:
    if not selections:
        raise ValidationError("Select at least one meal", field="selections")

    items = []
    for idx, sel in enumerate(selections):
        if not isinstance(sel.quantity, int) or sel.quantity < 1:
            raise ValidationError("Quantity must be at least 1", field=f"selections[{idx}].quantity")
        if sel.quantity > max_quantity:
            raise ValidationError(
                f"Quantity cannot exceed {max_quantity} per meal", field=f"selections[{idx}].quantity"
            )

        item = await get_active_item(db, sel.day, sel.meal_type)
        if item is None:
            raise NotBookable(f"{sel.day.value} {sel.meal_type.value} is not on the current menu")

        if not is_bookable(sel.day, sel.meal_type, now, cutoffs):
            raise NotBookable(f"Booking for {sel.day.value} {sel.meal_type.value} has closed")

        if sel.price is not None and Decimal(str(sel.price)) != item.price:
            raise ValidationError(
                f"Price for {sel.day.value} {sel.meal_type.value} is now {item.price}",
                field=f"selections[{idx}].price",
            )
        items.append(item)
    return items


async def initiate_order(
    db: AsyncSession,
    customer_name: str,
    customer_email: str,
    customer_phone: str,
    selections: Sequence[Selection],
    order_type: OrderType,
    now: datetime,
    cutoffs: Mapping = DEFAULT_CUTOFFS,
    max_quantity: int = MAX_QUANTITY_PER_SELECTION,
) -> str:
    """Validate a checkout and persist its coupons as Pending. Returns the order_id."""
    customer = validate_customer(customer_name, customer_email, customer_phone)
    items = await _resolve_selections(db, selections, now, cutoffs, max_quantity)

    order_id = str(uuid.uuid4())
    today = now.date()
    coupons = []
    for sel, item in zip(selections, items):
        meal_date = next_occurrence(sel.day, today)
        for _ in range(sel.quantity):
            coupons.append(
                Coupon(
                    order_id=order_id,
                    meal_date=meal_date,
                    meal_type=sel.meal_type,
                    price=item.price,
                    customer_name=customer.name,
                    customer_email=customer.email,
                    customer_phone=customer.phone,
                    order_type=order_type,
                    status=CouponStatus.PENDING,
                )
            )

    try:
        db.add_all(coupons)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Order intake rolled back for %s: %s", customer.email, exc)
        raise TransactionFailure("Could not place order; nothing was booked") from exc

    logger.info("Order %s initiated: %d coupon(s) for %s", order_id, len(coupons), customer.email)
    return order_id


async def get_order_receipt(db: AsyncSession, order_id: str) -> dict:
    """Display-ready receipt for one order, one line per (date, meal, price)."""
    coupons = await list_order_coupons(db, order_id)
    if not coupons:
        raise NotFound(f"Order {order_id} not found")

    lines: dict = {}
    for coupon in coupons:
        key = (coupon.meal_date, coupon.meal_type, coupon.price)
        line = lines.get(key)
        if line is None:
            line = lines[key] = {
                "day": DayOfWeek.from_date(coupon.meal_date).value,
                "meal_date": coupon.meal_date,
                "meal_type": coupon.meal_type.value,
                "unit_price": coupon.price,
                "quantity": 0,
                "coupon_ids": [],
                "statuses": Counter(),
            }
        line["quantity"] += 1
        line["coupon_ids"].append(coupon.id)
        line["statuses"][coupon.status.value] += 1

    receipt_lines = []
    for line in lines.values():
        line["subtotal"] = line["unit_price"] * line["quantity"]
        line["statuses"] = dict(line["statuses"])
        receipt_lines.append(line)

    first = coupons[0]
    return {
        "order_id": order_id,
        "customer_name": first.customer_name,
        "customer_email": first.customer_email,
        "customer_phone": first.customer_phone,
        "order_type": first.order_type.value,
        "created_at": first.created_at,
        "lines": receipt_lines,
        "total": sum((line["subtotal"] for line in receipt_lines), Decimal("0")),
    }
