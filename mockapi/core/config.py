# mockapi/core/config.py
import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_JWT_SECRET = "dev-secret-change-in-production"

VERSION = "1.0.0"

ADMIN_PREFIX = "/api/admin"

# served from STATIC_DIR, never routed to the mock responder
RESERVED_PATHS = (
    "/",
    "/index.html",
    "/app.js",
    "/json-editor.js",
    "/style.css",
    "/favicon.ico",
)


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


class Settings(BaseSettings):
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD)
    JWT_SECRET: str = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
    TOKEN_TTL_SECONDS: int = int(os.getenv("TOKEN_TTL_SECONDS", "86400"))
    DATA_PATH: str = os.getenv("DATA_PATH", "./data")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    STATIC_DIR: str = os.getenv("STATIC_DIR", "./public")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"


settings = Settings()
