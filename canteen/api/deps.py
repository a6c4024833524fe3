from datetime import datetime

from canteen.core.config import get_settings
from canteen.services.cutoff import cutoffs_from_settings
from canteen.utils.timezones import local_now


def get_now() -> datetime:
    """Current canteen-local time; overridden in tests to pin the clock."""
    return local_now()


def get_cutoffs() -> dict:
    return cutoffs_from_settings(get_settings().cutoff_times())
