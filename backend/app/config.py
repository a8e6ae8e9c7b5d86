# app/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Course Directory API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend (comma separated in CORS_ORIGINS)
    CORS_ORIGINS: list[str] = _csv(os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000",
    ))

settings = Settings()  # Instantiate configuration
