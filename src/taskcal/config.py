from pathlib import Path

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    data_path: str = "data"  # Directory holding the JSON collection files
    users_file: str = "users.json"
    tasks_file: str = "tasks.json"
    token_secret_key: str
    token_algorithm: str = "HS256"
    token_ttl_minutes: int = 60  # Tokens are stateless, this is the only way they end
    bcrypt_rounds: int = 10
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TASKCAL_",
        "extra": "ignore",
    }

    @property
    def users_path(self) -> Path:
        return Path(self.data_path) / self.users_file

    @property
    def tasks_path(self) -> Path:
        return Path(self.data_path) / self.tasks_file
