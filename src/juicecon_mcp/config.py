from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="JUICECON_", extra="ignore")
    nws_base_url: str = "https://api.weather.gov"
    user_agent: str = "(juicecon.app, contact@juicecon.app)"
    accept: str = "application/geo+json"
    http_timeout: float = 10.0
    zip_table: Optional[str] = None
    log_dir: str = "logs"
    log_level: str = "INFO"
    transport: str = "stdio"
    port: int = 8001


config = Config()
