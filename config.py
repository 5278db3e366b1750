"""
Configuration module - loads all settings from environment variables.
"""
import os
from dotenv import load_dotenv

from common.error_messages import StartupError

# Load environment variables from .env file
try:
    load_dotenv()
except Exception as e:
    print(f"Warning: Failed to load .env file: {e}")
    print("Continuing with environment variables or defaults...")


class Config:
    """Application configuration loaded from environment variables."""

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Safely parse integer environment variable."""
        try:
            return int(os.getenv(key, str(default)))
        except (ValueError, TypeError) as e:
            print(f"Warning: Invalid integer for {key}, using default {default}: {e}")
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Safely parse boolean environment variable."""
        try:
            value = os.getenv(key, str(default)).lower()
            return value in ("true", "1", "yes", "on")
        except Exception as e:
            print(f"Warning: Invalid boolean for {key}, using default {default}: {e}")
            return default

    # Output bucket
    OUTPUT_BUCKET: str = os.getenv("OUTPUT_BUCKET", "")
    OUTPUT_FOLDER: str = os.getenv("OUTPUT_FOLDER", "")  # e.g. "generated-images" or ""
    OUTPUT_BUCKET_REGION: str = os.getenv("OUTPUT_BUCKET_REGION") or "us-east-1"
    UNIQUE_OBJECT_KEYS: bool = _get_bool.__func__("UNIQUE_OBJECT_KEYS", False)

    # Gemini / Imagen API
    API_KEY: str = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY", "")
    IMAGEN_MODEL: str = os.getenv("IMAGEN_MODEL", "imagen-4.0-generate-preview-06-06")

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = _get_int.__func__("PORT", 8000)

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration, raising StartupError on the first gap."""
        missing = []
        if not cls.OUTPUT_BUCKET:
            missing.append("OUTPUT_BUCKET")
        if not cls.API_KEY:
            missing.append("API_KEY")
        if missing:
            raise StartupError(f"{', '.join(missing)} must be set")

    @classmethod
    def get_api_key(cls) -> str:
        """Get API_KEY, raise error if not set."""
        if not cls.API_KEY:
            raise StartupError("API_KEY must be set in environment variables")
        return cls.API_KEY
