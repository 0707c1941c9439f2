from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Redis (shared balance store for all cooperating instances)
    redis_url: str = "redis://localhost:6379/0"

    # Credit balances
    credit_key_prefix: str = "credit:balance"  # keys: <prefix>:<md5(type)>:<resource id>

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False


settings = Settings()
