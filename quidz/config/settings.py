from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for role bootstrap and admin auth calls

    # AWS S3 (optional replacement for Supabase Storage buckets)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "eu-central-1"
    s3_bucket_name: Optional[str] = None
    s3_public_base_url: Optional[str] = None  # e.g. a CloudFront domain; defaults to the bucket URL

    # Uploads
    max_upload_bytes: int = 20 * 1024 * 1024

    # Domain tuning
    ai_chat_function: str = "ai-chat"
    task_fanout_dedupe_minutes: int = 10
    low_mood_threshold: int = 2
    low_mood_alert_count: int = 3

    # App
    app_name: str = "quidz-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def s3_configured(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
