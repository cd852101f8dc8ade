"""
Application configuration
"""

from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Basic settings
    APP_NAME: str = "Jeopardy API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = ["*"]

    # Database settings
    DATABASE_URL: str = "sqlite:///./jeopardy.db"

    # Auth settings
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # LLM settings (OPENAI = chat/completions API, OLLAMA = /api/generate)
    LLM_API_TYPE: str = "OPENAI"
    LLM_BASE_URL: str = "http://localhost:11434"
    LLM_API_KEY: Optional[str] = None
    LLM_MODEL: str = "llama3.1"
    LLM_TIMEOUT: int = 120
    LLM_MAX_TOKENS: int = 4000

    # Game generation defaults
    DEFAULT_CATEGORY_COUNT: int = 5
    DEFAULT_QUESTIONS_PER_CATEGORY: int = 5
    GENERATION_LANGUAGE: str = "English"

    class Config:
        env_file = ".env"
        case_sensitive = True

# Global settings instance
settings = Settings()
