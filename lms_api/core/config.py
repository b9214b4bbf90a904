import json
from zoneinfo import ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings

from lms_api.core.constants import DEFAULT_CURRENCY_RATES, PartialDataPolicy
from lms_api.core.datetime_utils import get_zone


class Settings(BaseSettings):
    DATABASE_URL: str

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    BACKEND_CORS_ORIGINS: str = '["http://localhost:3000"]'

    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "LMS Affiliate Analytics API"
    DEBUG: bool = False

    # Units of each currency per 1 USD, e.g. '{"GHS": 14, "NGN": 1600}'
    CURRENCY_RATES: str = json.dumps(DEFAULT_CURRENCY_RATES)

    # Analytics
    ANALYTICS_TIMEZONE: str = "UTC"
    ANALYTICS_PARTIAL_DATA_POLICY: PartialDataPolicy = PartialDataPolicy.SILENT_ZERO
    ANALYTICS_TREND_MONTHS: int = 12
    ANALYTICS_TOP_COUNTRIES: int = 10
    REVENUE_DAILY_WINDOW_DAYS: int = 30

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @field_validator("ANALYTICS_TIMEZONE")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            get_zone(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.BACKEND_CORS_ORIGINS, str):
            try:
                parsed: list[str] = json.loads(self.BACKEND_CORS_ORIGINS)
                return parsed
            except json.JSONDecodeError:
                return ["http://localhost:3000"]
        return self.BACKEND_CORS_ORIGINS

    @property
    def currency_rates(self) -> dict[str, float]:
        try:
            parsed = json.loads(self.CURRENCY_RATES)
        except json.JSONDecodeError:
            return dict(DEFAULT_CURRENCY_RATES)
        return {str(code).upper(): float(rate) for code, rate in parsed.items()}


settings = Settings()
