from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, populate_by_name=True)

    app_name: str = "Trip Planner Core"
    environment: str = Field("local", alias="ENVIRONMENT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    activity_page_size: int = Field(20, alias="ACTIVITY_PAGE_SIZE", gt=0)
    min_search_length: int = Field(2, alias="MIN_SEARCH_LENGTH", ge=0)
    default_timezone: str = Field("UTC", alias="DEFAULT_TIMEZONE")
    overnight_hours_compat: bool = Field(False, alias="OVERNIGHT_HOURS_COMPAT")
    seed_demo_data: bool = Field(False, alias="SEED_DEMO_DATA")


@lru_cache()
def get_settings() -> Settings:
    load_dotenv(".env")
    return Settings()


settings = get_settings()
