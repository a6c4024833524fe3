from pydantic import BaseModel
from typing import Dict

from canteen.models.menu.menu_item import MealType


class TodaySummary(BaseModel):
    success: bool = True
    date: str
    summary: Dict[str, Dict[str, int]]
    upcoming_meal: MealType
