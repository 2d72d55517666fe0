"""
Gateway configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Gateway settings loaded from environment variables."""
    
    # S3-compatible storage
    s3_endpoint: Optional[str] = None  # e.g., play.min.io or https://<account_id>.r2.cloudflarestorage.com
    s3_bucket: Optional[str] = None
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_region: str = "us-east-1"
    s3_secure: bool = True  # TLS transport
    s3_presign_expiration: int = 3600  # Presigned GET URL lifetime in seconds (1 hour)
    s3_timeout: int = 10  # Connect/read timeout in seconds
    
    # Mailgun (transactional e-mail)
    mailgun_domain: Optional[str] = None
    mailgun_api_key: Optional[str] = None
    mailgun_from: Optional[str] = None
    mailgun_api_base: str = "https://api.mailgun.net/v3"  # EU region: https://api.eu.mailgun.net/v3
    mailgun_timeout: int = 10
    
    # Google service account (push-notification bearer tokens)
    google_credentials_json: Optional[str] = None  # Path to JSON file or JSON string
    
    # Logging
    log_level: str = "INFO"
    service_name: str = "object-gateway"
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
