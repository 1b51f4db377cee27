from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    comments_path: str = "comments.jsonl"  # JSON Lines log holding every comment
    host: str = "0.0.0.0"
    port: int = 5002
    debug: bool = False
    cors_origins: list[str] = []  # Origins of pages embedding the widget

    model_config = {
        "env_file": [".env"],
        "env_prefix": "COMMENTWIDGET_",
        "extra": "ignore",
    }
