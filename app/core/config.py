import os

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    GEMINI_API_KEY: str = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_OUTPUT_TOKENS: int = 1500
    SENTINEL_CLIENT_ID: str = os.environ.get("SENTINEL_CLIENT_ID", "")
    SENTINEL_CLIENT_SECRET: str = os.environ.get("SENTINEL_CLIENT_SECRET", "")
    SENTINEL_INSTANCE_ID: str = os.environ.get("SENTINEL_INSTANCE_ID", "")
    SENTINEL_ACCOUNT_ID: str = os.environ.get("SENTINEL_ACCOUNT_ID", "")
    CORS_ORIGIN: str = os.environ.get("CORS_ORIGIN", "*")
    UPLOAD_DIR: str = "uploads"
    # Dodoma Region, Tanzania
    DEFAULT_LAT: float = -6.369028
    DEFAULT_LON: float = 34.888822
    DEFAULT_REGION: str = "Dodoma Region"
    HTTP_TIMEOUT_SECONDS: float = 30.0
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


settings = Settings()
