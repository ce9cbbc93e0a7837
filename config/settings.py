from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from dotenv import load_dotenv

# Load .env file into os.environ BEFORE pydantic reads it so the Streamlit
# process and any helper scripts see the same configuration.
load_dotenv()


class Settings(BaseSettings):
    # Backend API
    API_BASE_URL: str = "http://localhost:8080/api"
    API_TIMEOUT_SECONDS: float = 10.0
    # Optional bearer token sent as Authorization header
    API_TOKEN: Optional[str] = None

    # List views
    DEFAULT_PAGE_SIZE: int = 10

    # Query cache: entries older than this are refetched on next read
    CACHE_TTL_SECONDS: float = 30.0
    # Least recently used entries are evicted past this many
    CACHE_MAX_ENTRIES: int = 256

    # Max threads for concurrent reads (dashboard issues roles + questions together)
    MAX_WORKER_THREADS: int = 4

    # Assessment flow
    DEFAULT_USER_ID: str = "anonymous"
    PLAN_HOURS_PER_WEEK: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # ignore unknown env vars instead of raising errors
    )


settings = Settings()
