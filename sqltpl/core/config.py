"""
Settings for sqltpl, read from the environment or a ``.env`` file.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MySQL connection used for charset-aware string escaping
    MYSQL_HOST: str | None = None
    MYSQL_PORT: int = 3306
    MYSQL_USER: str | None = None
    MYSQL_PASSWORD: str = ""
    MYSQL_DATABASE: str | None = None
    MYSQL_CHARSET: str = "utf8mb4"
    EXTERNAL_DB_CONNECT_TIMEOUT: int = 10

    # "block": a skip argument elides only the block it is bound to.
    # "global": any skip argument elides every block (legacy behavior).
    QUERY_SKIP_SCOPE: Literal["block", "global"] = "block"
    # Raise ArgumentCountMismatch instead of padding with NULL / ignoring extras.
    QUERY_STRICT_ARGS: bool = False


settings = Settings()
