from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings

"""
API CONFIGURATION
"""


#Class to load and read backend .env
class Settings(BaseSettings):

    APP_NAME: str = "AlphaFrame Contact API"

    #Which mail integration the contact handler sends through
    MAIL_PROVIDER: Literal["smtp", "brevo"] = "smtp"

    EMAIL_USER: str | None = None
    EMAIL_PASS: str | None = None
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465

    BREVO_API_KEY: str | None = None

    MAIL_FROM: str | None = None
    MAIL_FROM_NAME: str = "AlphaFrame Website"
    MAIL_TO: str | None = None

    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    BACKEND_ALLOW_STUB: bool = False

    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def sender_address(self) -> str | None:
        return self.MAIL_FROM or self.EMAIL_USER

    @property
    def recipient_address(self) -> str | None:
        return self.MAIL_TO or self.sender_address

    @property
    def backend_configured(self) -> bool:
        return bool(self.SUPABASE_URL or self.SUPABASE_ANON_KEY)


@lru_cache
def get_settings() -> Settings:
    return Settings()


#Allowed methods and headers for cross-origin requests
CORS_ALLOW_METHODS = ["POST", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type"]
