import os
from dotenv import load_dotenv
from typing import Dict, List, Any
from functools import lru_cache

load_dotenv()

class Settings:
    # Database Settings - SQLite file by default, PostgreSQL in deployed environments
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./matchmaking.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"
    DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", "10"))
    DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", "20"))
    DATABASE_POOL_TIMEOUT: int = int(os.getenv("DATABASE_POOL_TIMEOUT", "30"))
    DATABASE_POOL_RECYCLE: int = int(os.getenv("DATABASE_POOL_RECYCLE", "3600"))

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    # Admin Settings
    ADMIN_EMAILS: List[str] = [
        email.strip().lower()
        for email in os.getenv("ADMIN_EMAILS", "").split(",")
        if email.strip()
    ]
    ENABLE_ADMIN_ROUTES: bool = os.getenv("ENABLE_ADMIN_ROUTES", "true").lower() == "true"

    # Recommendation Settings
    RECOMMENDATION_MAX_RESULTS: int = int(os.getenv("RECOMMENDATION_MAX_RESULTS", "10"))
    RECOMMENDATION_MIN_SCORE: int = int(os.getenv("RECOMMENDATION_MIN_SCORE", "50"))

    # Event Match Generation Settings
    EVENT_MATCH_MAX_PER_APPLICANT: int = int(os.getenv("EVENT_MATCH_MAX_PER_APPLICANT", "5"))
    EVENT_MATCH_MIN_SCORE: int = int(os.getenv("EVENT_MATCH_MIN_SCORE", "60"))

    # CORS Configuration
    CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    CORS_METHODS: List[str] = os.getenv("CORS_METHODS", "GET,POST,OPTIONS").split(",")
    CORS_HEADERS: List[str] = os.getenv("CORS_HEADERS", "Content-Type,Authorization,X-User-Email,X-Request-ID").split(",")
    CORS_MAX_AGE: int = int(os.getenv("CORS_MAX_AGE", "86400"))  # 24 hours

    @property
    def cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration."""
        return {
            "allow_origins": self.CORS_ORIGINS,
            "allow_credentials": True,
            "allow_methods": self.CORS_METHODS,
            "allow_headers": self.CORS_HEADERS,
            "expose_headers": ["X-Request-ID"],
            "max_age": self.CORS_MAX_AGE
        }

    def is_admin_email(self, email: str) -> bool:
        """Check whether an email address belongs to a configured admin."""
        return bool(email) and email.strip().lower() in self.ADMIN_EMAILS

    def validate_configuration(self) -> List[str]:
        """Validate configuration and return list of issues."""
        errors = []

        if not self.DATABASE_URL:
            errors.append("DATABASE_URL must be set")

        for name in ("RECOMMENDATION_MAX_RESULTS", "EVENT_MATCH_MAX_PER_APPLICANT"):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be a positive integer")

        for name in ("RECOMMENDATION_MIN_SCORE", "EVENT_MATCH_MIN_SCORE"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                errors.append(f"{name} must be between 0 and 100, got {value}")

        if self.ENABLE_ADMIN_ROUTES and not self.ADMIN_EMAILS:
            errors.append("ADMIN_EMAILS is empty; admin routes will reject every request")

        return errors

@lru_cache()
def get_settings():
    return Settings()

settings = get_settings()
