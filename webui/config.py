from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JOBBOARD_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    api_base_url: str = "http://localhost:8000/api/v1"

    # Whole-request deadline, seconds
    request_timeout: float = 10.0


client_settings = ClientSettings()
