from .menu_item import DayOfWeek, MealType, MenuItem
