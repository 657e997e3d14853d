from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Redis (state bus)
    REDIS_URL: str = "redis://redis:6379/0"

    # App
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Demo mode: generated states instead of Redis
    DEMO_MODE: bool = False

    # HMI panel
    REFRESH_INTERVAL: float = 2.0
    HMI_DEVICE_NAME: str = "generator"
    HMI_TITLE: str = "GENERATOR"
    HMI_CONFIG_FILE: str = ""              # optional JSON card config, overrides the above
    HMI_STATE_KEY: str = "hmi:{device}:states"  # {device} = normalized device name

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
