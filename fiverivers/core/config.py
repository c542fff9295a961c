from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 120

    ENVIRONMENT: str = "development"  # "development" or "production"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "https://5riverstruckinginc.ca",
    ]

    DEFAULT_PAGE_SIZE: int = 20
    HST_RATE: float = 0.13

    # Issuing company block printed on invoice PDFs
    INVOICE_COMPANY_NAME: str = "5 Rivers Trucking Inc."
    INVOICE_COMPANY_ADDRESS: str = "140 Cherryhill Place\nLondon, Ontario\nN6H4M5"
    INVOICE_COMPANY_PHONE: str = "+1 (437) 679 9350"
    INVOICE_COMPANY_EMAIL: str = "info@5riverstruckinginc.ca"
    INVOICE_COMPANY_HST_NUMBER: str = "760059956"

    @property
    def is_production(self):
        return self.ENVIRONMENT == "production"

    @property
    def hst_percent(self):
        return round(self.HST_RATE * 100, 2)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
