"""
Configuration settings for Test Case Ace
"""
from pydantic_settings import BaseSettings
from pathlib import Path


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Test Case Ace"
    DEBUG: bool = False

    # Paths
    BASE_DIR: Path = Path(__file__).parent.parent
    FRONTEND_DIR: Path = BASE_DIR / "frontend"

    # Ollama settings
    OLLAMA_HOST: str = "http://localhost:11434"
    OLLAMA_TEXT_MODEL: str = "llama3.2"
    OLLAMA_VISION_MODEL: str = "llava"
    GENERATION_TEMPERATURE: float = 0.7
    VERIFICATION_TEMPERATURE: float = 0.2

    # API test execution
    HTTP_TIMEOUT: float = 30.0  # seconds

    # UI scenario uploads
    MAX_IMAGE_BYTES: int = 4 * 1024 * 1024

    # Workspaces kept in memory; the least recently used is dropped past this
    MAX_SESSIONS: int = 500

    # PDF rendering
    PDF_FORMAT: str = "A4"
    PDF_MARGIN: str = "40px"
    PDF_TIMEOUT: int = 30000  # ms

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
