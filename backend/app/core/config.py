from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App Configuration
    app_name: str = "HRV Analyzer Backend"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    
    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    
    # Security
    allowed_origins: List[str] = ["*"]  # Frontend runs on another origin
    
    # Production Settings
    workers: int = 4
    timeout: int = 30
    keepalive: int = 2
    
    # Logging
    log_level: str = "INFO"
    
    # Uploads
    upload_dir: str = "uploads"
    max_upload_size: int = 10 * 1024 * 1024  # 10MB
    allowed_extensions: List[str] = [".csv", ".fit", ".gpx"]
    csv_chunk_size: int = 10000
    
    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"
    
    @property
    def max_upload_size_mb(self) -> int:
        return self.max_upload_size // (1024 * 1024)
    
    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
