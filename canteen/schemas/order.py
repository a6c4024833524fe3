from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List, Optional
from datetime import date, datetime
from decimal import Decimal

from canteen.models.coupon.coupon import OrderType
from canteen.models.menu.menu_item import DayOfWeek, MealType


# ---------- Intake ----------
class SelectionIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: DayOfWeek
    meal_type: MealType = Field(alias="mealType")
    quantity: int = 1
    price: Optional[Decimal] = None


class OrderInitiate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_name: str = Field(alias="customerName")
    customer_email: str = Field(alias="customerEmail")
    customer_phone: str = Field(alias="customerPhone")
    order_type: OrderType = Field(default=OrderType.DINE_IN, alias="orderType")
    selections: List[SelectionIn]


class OrderInitiated(BaseModel):
    success: bool = True
    order_id: str


class OrderConfirmed(BaseModel):
    success: bool = True
    order_id: str
    activated: int


# ---------- Receipt ----------
class ReceiptLine(BaseModel):
    day: DayOfWeek
    meal_date: date
    meal_type: MealType
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    coupon_ids: List[int]
    statuses: Dict[str, int]


class OrderReceipt(BaseModel):
    order_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    order_type: OrderType
    created_at: datetime
    lines: List[ReceiptLine]
    total: Decimal
