# server/core/config.py

import os
from dataclasses import dataclass
from dotenv import load_dotenv


load_dotenv()


DEFAULT_DATABASE_URL = "sqlite:///./data/app.db"


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration read from the environment (and .env, if present).
    """
    jwt_secret_key: str
    database_url: str = DEFAULT_DATABASE_URL
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_rounds: int = 10
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


def get_settings() -> Settings:
    secret = os.getenv("JWT_SECRET_KEY", "").strip()
    if not secret:
        raise RuntimeError("JWT_SECRET_KEY is required.")

    return Settings(
        jwt_secret_key=secret,
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=_env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 60),
        bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 10),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
