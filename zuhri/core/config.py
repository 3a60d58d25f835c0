from pydantic_settings import BaseSettings
from typing import Optional, List
from zuhri.core.constants import DEFAULT_INSTITUTION_NAME

class Settings(BaseSettings):
    PROJECT_NAME: str = "Zuhri Learning"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 2  # 2 days

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:3001",
        "http://127.0.0.1:3001",
        "http://localhost:5000",
        "http://127.0.0.1:5000",
        "https://hadith-learning.netlify.app",
    ]
    ALLOWED_ORIGIN_REGEX: str = r"https://.*\.(vercel\.app|netlify\.app|render\.com)"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./zuhri.db"
    TEST_DATABASE_URL: Optional[str] = None

    # Cache
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 300
    REDIS_URL: Optional[str] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Learning rules
    LESSON_COMPLETION_RATIO: float = 0.9
    EXAM_RESULT_REDIRECT_SECONDS: int = 2
    ATTEMPT_EXPIRY_GRACE_SECONDS: int = 60
    ATTEMPT_SWEEP_INTERVAL_MINUTES: int = 5

    # Certificates
    INSTITUTION_NAME: str = DEFAULT_INSTITUTION_NAME
    CERTIFICATE_STORAGE_DIR: str = "storage/certificates"
    CERTIFICATE_FONT_PATH: Optional[str] = None
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None

    TESTING: bool = False

    @property
    def cloudinary_enabled(self) -> bool:
        return bool(self.CLOUDINARY_CLOUD_NAME and self.CLOUDINARY_API_KEY and self.CLOUDINARY_API_SECRET)

    class Config:
        env_file = ".env"

settings = Settings()
