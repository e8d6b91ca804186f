import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    jwt_expires_in: int = 360000  # 100 hours
    jwt_algorithm: str = "HS256"
    firebase_credentials_path: str = "./firebase.json"
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000


def load_settings() -> Settings:
    """
    Build the settings from the environment (and a .env file if present)
    :return: the application settings
    :raises RuntimeError: if JWT_SECRET is not set
    """
    load_dotenv()

    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise RuntimeError("JWT_SECRET must be set")

    origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    return Settings(
        jwt_secret=secret,
        jwt_expires_in=int(os.getenv("JWT_EXPIRES_IN", "360000")),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        firebase_credentials_path=os.getenv("FIREBASE_CREDENTIALS_PATH", "./firebase.json"),
        cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
