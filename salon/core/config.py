from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    FIREBASE_API_KEY: str | None = None
    FIREBASE_PROJECT_ID: str | None = None
    FIREBASE_AUTH_BASE_URL: str = "https://identitytoolkit.googleapis.com/v1"
    FIRESTORE_BASE_URL: str = "https://firestore.googleapis.com/v1"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    BUSINESS_NAME: str = "Your Salon"
    BUSINESS_TIMEZONE: str = "Asia/Kolkata"
    CURRENCY_SYMBOL: str = "₹"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
