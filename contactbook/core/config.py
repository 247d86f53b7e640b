from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    PROJECT_NAME: str = "Contactbook"
    VERSION: str = "1.0.0"

    # Contacts resource the client talks to
    API_BASE_URL: str = "http://localhost:3000"
    CONTACTS_PATH: str = "/contacts"

    # Seconds; None leaves requests unbounded
    REQUEST_TIMEOUT: Optional[float] = None

    # Server bind address
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
