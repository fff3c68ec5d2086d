from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = ""

    # Secrets
    SLACK_WEBHOOK: str = ""
    ALCHEMY_API_KEY: str = ""

    # Token alerts
    HEARTBEAT_INTERVAL: int = Field(100, gt=0)

    # Application
    API_SECRET_KEY: str = "dev-secret-key"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
