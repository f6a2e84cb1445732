"""
Application configuration and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables"""

    # Record store (Supabase)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    STORE_TIMEOUT_SECONDS: float = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))
    # Rows per request; keep at or below the project's PostgREST max rows
    STORE_PAGE_SIZE: int = int(os.getenv("STORE_PAGE_SIZE", "1000"))

    # Calendar day boundaries for completions and streaks
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "UTC")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Terminal client
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8000")
    HOTSTREAK_ACCESS_TOKEN: str = os.getenv("HOTSTREAK_ACCESS_TOKEN", "")


# Create a global settings instance
settings = Settings()
