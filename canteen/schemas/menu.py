from pydantic import BaseModel
from typing import Dict, List
from datetime import datetime
from decimal import Decimal

from canteen.models.menu.menu_item import DayOfWeek, MealType


class MenuEntry(BaseModel):
    description: str
    price: Decimal


class ActiveMenuResponse(BaseModel):
    success: bool = True
    menu: Dict[str, Dict[str, MenuEntry]]


class MenuItemRead(BaseModel):
    id: int
    day_of_week: DayOfWeek
    meal_type: MealType
    version: int
    description: str
    price: Decimal
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class MenuItemList(BaseModel):
    success: bool = True
    menu: List[MenuItemRead]


class MenuUploadResponse(BaseModel):
    success: bool = True
    message: str
    item_count: int
    version: int
