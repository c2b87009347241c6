from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv

# Load .env file into os.environ BEFORE pydantic reads it
# Langfuse SDK and LangChain providers read credentials from os.environ too
load_dotenv()


class Settings(BaseSettings):
    # LLM Configuration
    LLM_PROVIDER: str = "openai"
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.7

    # Collaborator calls must never block a request indefinitely
    LLM_TIMEOUT_SECONDS: float = 30.0
    LLM_MAX_RETRIES: int = 1

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None

    # OpenRouter
    OPENROUTER_API_KEY: Optional[str] = None

    # Gemini
    GEMINI_API_KEY: Optional[str] = None

    # Database
    DATABASE_URL: str = "sqlite:///./idp.db"

    # Server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # API Security (X-API-Key). Unset disables the check for local development.
    API_SECRET_KEY: Optional[str] = None

    # Appraisal sheet download
    SHEET_FETCH_TIMEOUT_SECONDS: float = 10.0

    # Optimistic-concurrency retries for mark-as-read writes
    PLAN_UPDATE_MAX_RETRIES: int = 5

    # Langfuse Observability
    LANGFUSE_PUBLIC_KEY: Optional[str] = None
    LANGFUSE_SECRET_KEY: Optional[str] = None
    LANGFUSE_HOST: str = "https://cloud.langfuse.com"
    LANGFUSE_ENABLED: bool = False

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # ignore unknown env vars instead of raising errors
    )


settings = Settings()
