from sqlalchemy import Column, Integer, Boolean, Text, DateTime, Numeric, Enum, Index, text
from datetime import datetime
from canteen.models.base import Base, enum_values
import enum


class DayOfWeek(str, enum.Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_date(cls, d) -> "DayOfWeek":
        # date.weekday(): Monday=0 .. Sunday=6, same order as the members
        return list(cls)[d.weekday()]


class MealType(str, enum.Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    day_of_week = Column(Enum(DayOfWeek, values_callable=enum_values, native_enum=False, length=16), nullable=False)
    meal_type = Column(Enum(MealType, values_callable=enum_values, native_enum=False, length=16), nullable=False)
    version = Column(Integer, nullable=False)  # publication number, shared by one upload
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        # At most one active item per slot; inactive history is unconstrained
        Index(
            "uq_menu_items_active_slot",
            "day_of_week",
            "meal_type",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
        Index("idx_menu_items_slot_version", "day_of_week", "meal_type", "version"),
    )

    def __repr__(self) -> str:
        return f"<MenuItem {self.day_of_week.value} {self.meal_type.value} v{self.version} active={self.is_active}>"
