from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # API configurations
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Grocery Catalog API"

    # CORS configurations
    CORS_ORIGINS: list = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:3001",
        "http://localhost:3002",
        "http://localhost:3003",
    ]

    # Logging configurations
    LOG_LEVEL: str = "INFO"

    # Database configurations
    MONGODB_URI: str = "mongodb://localhost:27017"
    DB1_USERNAME: str = ""
    DB1_PASSWORD: str = ""
    DB1_HOST: str = ""
    DB1_AUTH_SOURCE: str = "admin"
    DB_NAME: str = "ecom_db"
    MONGO_TIMEOUT_MS: int = 5000

    # JWT configurations
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"

    # Pagination
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
