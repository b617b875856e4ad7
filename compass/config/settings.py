from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    cors_origins: list[str] = ["http://localhost:3000"]
    analysis_cache_ttl: int = 86400
    recommendations_enabled: bool = True
    recommendation_model: str = ""
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
