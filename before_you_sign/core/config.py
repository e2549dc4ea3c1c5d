import os
from pydantic_settings import BaseSettings

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Settings(BaseSettings):
    # 🧠 App Info
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Before You Sign")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"

    # 🗄️ Database (single local SQLite file by default)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./data/before_you_sign.db")

    # 📁 Templates & static assets
    TEMPLATES_DIR: str = os.getenv("TEMPLATES_DIR", os.path.join(PACKAGE_DIR, "templates"))
    STATIC_DIR: str = os.getenv("STATIC_DIR", os.path.join(PACKAGE_DIR, "static"))

    # 🔒 Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "before-you-sign-secret-key-2024")
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "bys_session")
    SESSION_MAX_AGE_SECONDS: int = int(os.getenv("SESSION_MAX_AGE_SECONDS", 24 * 60 * 60))
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", 10))

    # 🕓 Logs
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
