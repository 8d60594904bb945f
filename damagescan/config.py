from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "DamageScan Estimator"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Batches are bounded so one request always finishes quickly
    MAX_ROOMS_PER_BATCH: int = 100

    CORS_ORIGINS: str = "http://localhost:5173,https://localhost:5173"

    class Config:
        env_file = ".env"

    @property
    def cors_origin_list(self) -> list:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
