from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Ensure environment variables from the repository root .env are available
# regardless of the working directory used to start the process.
ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")

DEFAULT_PROCESSING_ENDPOINT = "https://scanner-backend-jref.onrender.com"

# A4 in PDF points.
A4_WIDTH_PT = 595.0
A4_HEIGHT_PT = 842.0


class Settings(BaseSettings):
  processing_endpoint: str = Field(default=DEFAULT_PROCESSING_ENDPOINT, alias="LENSSCAN_PROCESSING_ENDPOINT")
  processing_timeout_seconds: float = Field(default=60.0, gt=0, alias="LENSSCAN_PROCESSING_TIMEOUT")
  jpeg_quality: int = Field(default=92, ge=90, le=100, alias="LENSSCAN_JPEG_QUALITY")
  export_page_width: float = Field(default=A4_WIDTH_PT, gt=0, alias="LENSSCAN_EXPORT_PAGE_WIDTH")
  export_page_height: float = Field(default=A4_HEIGHT_PT, gt=0, alias="LENSSCAN_EXPORT_PAGE_HEIGHT")
  export_name_prefix: str = Field(default="Scan", alias="LENSSCAN_EXPORT_NAME_PREFIX")

  def ensure_endpoint(self) -> str:
    return (self.processing_endpoint or "").strip()

  class Config:
    case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  return Settings()  # type: ignore[arg-type]
