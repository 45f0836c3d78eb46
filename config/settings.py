from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv

# Load .env file into os.environ BEFORE pydantic reads it
load_dotenv()


class Settings(BaseSettings):
    # Database
    # SQLite works out of the box; use postgresql://... in deployed environments
    DATABASE_URL: str = "sqlite:///./profiles.db"
    AUTO_CREATE_TABLES: bool = True

    # Server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    # Public URL used when building links in emails (falls back to the request URL)
    PUBLIC_BASE_URL: Optional[str] = None
    ALLOWED_ORIGINS: str = "*"

    # Diagnostics: include exception text in 500 responses
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Access tokens
    TOKEN_TTL_HOURS: int = 24
    # "memory" (single long-running process) or "database" (stateless functions)
    TOKEN_STORE: str = "memory"
    # Accept submissions for tokens the registry does not know (or has expired)
    ALLOW_UNREGISTERED_TOKENS: bool = True
    # Tokens with this prefix always skip the registry check
    TEST_TOKEN_PREFIX: str = "test-"
    # Reject a second submission against the same token
    SINGLE_USE_TOKENS: bool = False

    # Email (SMTP)
    EMAIL_ENABLED: bool = False
    EMAIL_HOST: str = "smtp.gmail.com"
    EMAIL_PORT: int = 587
    EMAIL_USE_TLS: bool = True
    EMAIL_USE_SSL: bool = False
    EMAIL_HOST_USER: Optional[str] = None
    EMAIL_HOST_PASSWORD: Optional[str] = None
    EMAIL_FROM_ADDRESS: Optional[str] = None
    EMAIL_FROM_NAME: str = "Profile Collection"
    EMAIL_TIMEOUT_SECONDS: int = 15
    # Attach an interactive AMP form part alongside the HTML link
    EMAIL_SEND_AMP: bool = True

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # ignore unknown env vars instead of raising errors
    )


settings = Settings()
