# product_app/config.py

"""
Runtime settings for the Product Manager service.
Values come from environment variables, with defaults for local/dev.
"""
import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field

# Read settings from environment variables, with defaults for local/dev
PRICE_FRACTION_DIGITS = int(os.getenv("PRICE_FRACTION_DIGITS", "2"))
CURRENCY_PREFIX = os.getenv("CURRENCY_PREFIX", "Rp")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOW_ORIGINS = os.getenv("CORS_ALLOW_ORIGINS", "*")


class Settings(BaseModel):
    # 2 for the detailed variant, 0 for the compact one
    price_fraction_digits: int = Field(2, ge=0, le=2)
    currency_prefix: str = "Rp"
    log_level: str = "INFO"
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])


@lru_cache
def get_settings() -> Settings:
    """
    Dependency returning the process-wide settings.
    Tests override it through `app.dependency_overrides`.
    """
    return Settings(
        price_fraction_digits=PRICE_FRACTION_DIGITS,
        currency_prefix=CURRENCY_PREFIX,
        log_level=LOG_LEVEL,
        cors_allow_origins=[o.strip() for o in CORS_ALLOW_ORIGINS.split(",") if o.strip()],
    )
