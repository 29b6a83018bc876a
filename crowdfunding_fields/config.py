from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Crowdfunding Fields"
    app_version: str = "1.0"
    debug: bool = False
    environment: str = "development"

    # Metadata store
    database_url: str = "sqlite:///./crowdfunding_fields.db"

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None

    # Per-plugin options (enabled flags, plugin config)
    plugins_config_file: str = "data/plugins_config.json"

    model_config = SettingsConfigDict(
        env_prefix="CROWDFUNDING_FIELDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
