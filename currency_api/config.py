"""
Application settings loaded from environment variables.

Uses pydantic-settings for type-safe configuration with .env file support.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

# EUR is not listed because every rate in the feed is quoted against it
DEFAULT_CURRENCIES = [
    "USD", "JPY", "BGN", "CZK", "DKK", "GBP", "HUF", "LTL",
    "PLN", "RON", "SEK", "CHF", "NOK", "HRK", "RUB", "TRY",
    "AUD", "BRL", "CAD", "CNY", "HKD", "IDR", "ILS", "INR",
    "KRW", "MXN", "MYR", "NZD", "PHP", "SGD", "THB", "ZAR",
]


class Settings(BaseSettings):
    """Global application settings."""

    # App
    APP_NAME: str = "Currency API"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Feed
    # last 90 days only: https://www.ecb.europa.eu/stats/eurofxref/eurofxref-hist-90d.xml
    FEED_URL: str = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-hist.xml"
    FEED_TIMEOUT_SECONDS: float = 30.0
    REFRESH_INTERVAL_SECONDS: int = 3600

    # Currencies
    BASE_CURRENCY: str = "EUR"
    ALLOWED_CURRENCIES: list[str] = DEFAULT_CURRENCIES

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("BASE_CURRENCY")
    @classmethod
    def _normalize_base(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3 or not value.isascii() or not value.isalpha():
            raise ValueError(f"Invalid currency code: {value!r}")
        return value

    @field_validator("ALLOWED_CURRENCIES")
    @classmethod
    def _normalize_allowed(cls, value: list[str]) -> list[str]:
        codes = []
        for code in value:
            code = code.strip().upper()
            if len(code) != 3 or not code.isascii() or not code.isalpha():
                raise ValueError(f"Invalid currency code: {code!r}")
            if code not in codes:
                codes.append(code)
        return codes

    @field_validator("REFRESH_INTERVAL_SECONDS")
    @classmethod
    def _positive_interval(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("REFRESH_INTERVAL_SECONDS must be positive")
        return value

    @model_validator(mode="after")
    def _base_not_allowed(self) -> "Settings":
        if self.BASE_CURRENCY in self.ALLOWED_CURRENCIES:
            raise ValueError(
                f"{self.BASE_CURRENCY} is the base currency and cannot be in ALLOWED_CURRENCIES"
            )
        return self

    @property
    def allow_set(self) -> frozenset[str]:
        return frozenset(self.ALLOWED_CURRENCIES)


settings = Settings()
