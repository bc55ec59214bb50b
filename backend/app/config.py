"""Application configuration."""

import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables
load_dotenv()

DEV_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    """Settings for the dashboard API, read from the environment or .env."""

    app_name: str = "Coachboard API"
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"
    frontend_url: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Dashboard sessions
    secret_key: str = os.getenv("SESSION_SECRET", "dev-secret-key-change-in-production")
    session_cookie: str = os.getenv("SESSION_COOKIE", "coachboard_session")
    session_max_age: int = int(os.getenv("SESSION_MAX_AGE", "86400"))
    cookie_secure: bool = os.getenv("COOKIE_SECURE", "False").lower() == "true"
    allowed_roles: List[str] = [
        role.strip().lower()
        for role in os.getenv("ALLOWED_ROLES", "coach").split(",")
        if role.strip()
    ]

    # Upstream roster, schedule and attendance services
    coach_api_url: str = os.getenv("COACHBOARD_API_URL", "http://localhost:5000/api")
    coach_api_timeout: float = float(os.getenv("COACHBOARD_API_TIMEOUT", "30"))
    error_summary_chars: int = int(os.getenv("ERROR_SUMMARY_CHARS", "80"))

    @property
    def allowed_origins(self) -> List[str]:
        """CORS origins; local dev servers are added in debug mode."""
        origins = [self.frontend_url, *(DEV_ORIGINS if self.debug else [])]
        return [origin for origin in dict.fromkeys(origins) if origin]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
