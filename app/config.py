from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PORT: int = 4000

    # empty URI means no store: every request is served from the fallback dataset
    MONGODB_URI: str = ""
    DB_NAME: str = "Extell"
    COLLECTION_NAME: str = "Products"

    SERVER_SELECTION_TIMEOUT_MS: int = 5000
    QUERY_TIMEOUT_MS: int = 12000
    LIST_QUERY_TIMEOUT_MS: int = 15000
    FALLBACK_ON_STARTUP_FAILURE: bool = True

    API_PREFIX: str = ""
    CORS_ORIGINS: list[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
