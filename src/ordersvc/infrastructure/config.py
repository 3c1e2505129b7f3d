from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ORDERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    database_url: str = "sqlite+aiosqlite:///./data/orders.db"

    # product catalog service
    products_url: str = "http://localhost:3001"
    products_timeout: float = 5.0

    log_level: str = "INFO"


settings = Settings()
