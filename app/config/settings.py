from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    canvas_api_token: str = ""
    canvas_base_url: str = "https://canvas.instructure.com/api/v1/"
    canvas_timeout_seconds: int = 30

    map_file: str = "map.csv"
    id_is_sis: bool = True
    report_dir: str = "."

    target_workers: int = 7
    dry_run: bool = False
