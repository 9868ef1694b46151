from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import os

from state import Language

class Settings(BaseSettings):
    """
    Application settings configuration
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields from .env that are not defined in Settings
    )

    # Application settings
    app_name: str = Field(default="Assisted KYC Wizard")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server settings
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    # CORS settings
    allowed_origins: List[str] = Field(default=["*"])

    # Voice settings
    primary_language_tag: str = Field(default="en-US")
    secondary_language_tag: str = Field(default="hi-IN")
    listen_timeout_seconds: float = Field(default=8.0, gt=0)

    # Connectivity
    initially_online: bool = Field(default=True)

    # Logging settings
    log_level: str = Field(default="INFO")

    def language_tag(self, language: Language) -> str:
        """Map a Language to the tag passed to the voice adapter."""
        if language == Language.SECONDARY:
            return self.secondary_language_tag
        return self.primary_language_tag


# Environment-specific configurations
class DevelopmentConfig(Settings):
    debug: bool = True
    log_level: str = "DEBUG"

class ProductionConfig(Settings):
    debug: bool = False
    log_level: str = "INFO"
    allowed_origins: List[str] = []  # Restrict in production

class TestingConfig(Settings):
    debug: bool = True
    listen_timeout_seconds: float = 0.2

def get_settings(environment: Optional[str] = None) -> Settings:
    """Get settings based on environment"""
    env = environment or os.getenv("ENVIRONMENT", "development").lower()

    if env == "production":
        return ProductionConfig()
    elif env == "testing":
        return TestingConfig()
    else:
        return DevelopmentConfig()
