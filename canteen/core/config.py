from datetime import time
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment
load_dotenv()

DEFAULT_MEAL_CUTOFFS = {
    "Breakfast": "08:30",
    "Lunch": "12:30",
    "Dinner": "19:30",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./canteen.db"
    db_echo: bool = False
    log_level: str = "INFO"
    timezone: str = "Asia/Kolkata"
    meal_cutoffs: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_MEAL_CUTOFFS))
    search_page_size: int = 200
    max_quantity_per_selection: int = Field(default=20, ge=1)
    allow_origins: list[str] = ["*"]

    @field_validator("meal_cutoffs")
    @classmethod
    def check_cutoff_format(cls, value: dict[str, str]) -> dict[str, str]:
        for meal, hhmm in value.items():
            try:
                time.fromisoformat(hhmm)
            except ValueError as exc:
                raise ValueError(f"Cutoff for {meal} must be HH:MM, got {hhmm!r}") from exc
        return value

    def cutoff_times(self) -> dict[str, time]:
        return {meal: time.fromisoformat(hhmm) for meal, hhmm in self.meal_cutoffs.items()}


@lru_cache
def get_settings() -> Settings:
    return Settings()
