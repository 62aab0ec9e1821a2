import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# -----------------------------
# Константы приложения
# -----------------------------
APP_PORT = 3000
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
BCRYPT_ROUNDS = 10

REQUIRED_ENV = ("DB_USER", "DB_HOST", "DB_NAME", "DB_PASSWORD", "DB_PORT", "JWT_SECRET")


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    """Настройки процесса. Создаются один раз при старте и дальше только читаются."""

    database_url: str
    jwt_secret: str
    access_token_expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES

    @classmethod
    def from_env(cls, env: Optional[dict] = None) -> "Settings":
        if env is None:
            load_dotenv()  # Загружаем переменные из .env файла
            env = os.environ

        missing = [name for name in REQUIRED_ENV if not env.get(name)]
        if missing:
            raise ConfigError("Missing required environment variables: " + ", ".join(missing))

        try:
            port = int(env["DB_PORT"])
        except ValueError:
            raise ConfigError(f"DB_PORT must be an integer, got {env['DB_PORT']!r}")

        url = URL.create(
            "postgresql+psycopg2",
            username=env["DB_USER"],
            password=env["DB_PASSWORD"],
            host=env["DB_HOST"],
            port=port,
            database=env["DB_NAME"],
        )
        return cls(
            database_url=url.render_as_string(hide_password=False),
            jwt_secret=env["JWT_SECRET"],
        )
