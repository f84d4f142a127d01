from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:5000/api"
    API_TOKEN: str = ""
    API_TIMEOUT_SECONDS: float = 15.0

    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    SESSION_COOKIE_NAME: str = "payments_session"
    SESSION_IDLE_MINUTES: int = 120  # 2 hours
    SESSION_SWEEP_ENABLED: bool = True
    SESSION_SWEEP_MINUTES: int = 15

    TIMEZONE: str = "Asia/Kolkata"
    CURRENCY: str = "INR"
    CURRENCY_SYMBOL: str = "₹"

    LOG_LEVEL: str = "INFO"
    TEMPLATES_DIR: str = "templates"
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
