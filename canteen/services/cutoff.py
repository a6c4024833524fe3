"""
Same-day booking cutoffs.

Everything here is pure: the reference time is always passed in, so the
rules can be exercised at any instant without touching a clock.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Mapping, Union

from canteen.core.errors import ConfigurationError
from canteen.models.menu.menu_item import DayOfWeek, MealType

logger = logging.getLogger(__name__)

DEFAULT_CUTOFFS = {
    MealType.BREAKFAST: time(8, 30),
    MealType.LUNCH: time(12, 30),
    MealType.DINNER: time(19, 30),
}


def _as_day(day: Union[DayOfWeek, str]) -> DayOfWeek:
    return day if isinstance(day, DayOfWeek) else DayOfWeek(day)


def _lookup_cutoff(meal_type, cutoffs: Mapping) -> time:
    key = meal_type.value if isinstance(meal_type, MealType) else str(meal_type)
    for meal, cutoff in cutoffs.items():
        name = meal.value if isinstance(meal, MealType) else str(meal)
        if name == key:
            return cutoff
    logger.error("No booking cutoff configured for meal type %r; refusing booking", key)
    raise ConfigurationError(f"No booking cutoff configured for meal type '{key}'")


def is_bookable(
    day_of_week: Union[DayOfWeek, str],
    meal_type: Union[MealType, str],
    now: datetime,
    cutoffs: Mapping = DEFAULT_CUTOFFS,
) -> bool:
    """
    True if (day_of_week, meal_type) can still be booked at ``now``.

    Any day other than today is open. For today, booking is open strictly
    before the meal's cutoff (08:30 cutoff: 08:29 open, 08:30 closed).
    Raises ConfigurationError for a meal type with no cutoff.
    """
    cutoff = _lookup_cutoff(meal_type, cutoffs)

    if _as_day(day_of_week) != DayOfWeek.from_date(now):
        return True

    return (now.hour, now.minute) < (cutoff.hour, cutoff.minute)


def next_occurrence(day_of_week: Union[DayOfWeek, str], today: date) -> date:
    """The next date falling on day_of_week, counting today itself."""
    target = list(DayOfWeek).index(_as_day(day_of_week))
    return today + timedelta(days=(target - today.weekday()) % 7)


def upcoming_meal(now: datetime) -> MealType:
    if now.hour < 10:
        return MealType.BREAKFAST
    if now.hour < 16:
        return MealType.LUNCH
    return MealType.DINNER


def cutoffs_from_settings(raw: Mapping[str, time]) -> dict:
    """Key configured cutoffs by MealType. Unknown names are dropped with a warning."""
    resolved = {}
    for name, cutoff in raw.items():
        try:
            resolved[MealType(name)] = cutoff
        except ValueError:
            logger.warning("Ignoring cutoff for unknown meal type %r", name)
    return resolved
