from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]
    host: str = "127.0.0.1"
    port: int = 8000

    # Cost of a single support ticket used by the satisfaction formula
    support_ticket_cost: float = 50.0

    # Correlation analysis
    correlation_min_samples: int = 3
    insight_strong_threshold: float = 0.7
    insight_positive_threshold: float = 0.5
    insight_negative_threshold: float = -0.5
    insight_investment_warning: float = -0.3

    model_config = SettingsConfigDict(env_prefix="ROI_TRACKER_", env_file=".env")
