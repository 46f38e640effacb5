from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List

from usemyvoucher.utils.categories import DEFAULT_VOUCHER_CATEGORIES


class Settings(BaseSettings):
    # App
    APP_NAME: str = "UseMyVoucher"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:5173"]

    # Extraction
    MAX_TEXT_LENGTH: int = 20_000  # Pasted OCR text above this is rejected
    DEFAULT_CATEGORIES: List[str] = Field(default_factory=lambda: list(DEFAULT_VOUCHER_CATEGORIES))

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
