import functools
import sys
from enum import StrEnum

from dotenv import load_dotenv
from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

load_dotenv(
    override=True,  # Override existing environment variables
)


class LogLevel(StrEnum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    TRACE = "trace"


class Config(BaseSettings):
    # Object storage configuration
    storage_backend: str = "s3"  # Options: "s3", "local"
    s3_bucket: str = ""  # Required when storage_backend is "s3"
    aws_region: str = "us-east-1"
    s3_endpoint: str = ""  # Leave empty for AWS, set for MinIO and friends
    s3_prefix: str = ""  # Optional key prefix inside the bucket
    local_path: str = "/var/s3share/objects"  # Root directory for the local backend

    # Secret cache configuration
    cache_backend: str = "redis"  # Options: "redis", "memory"
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str = ""
    redis_db: int = 0
    redis_tls_enabled: bool = False

    # Share link policy
    base_url: str = "http://localhost:8080"  # Prefix of every minted share URL
    max_age_days: int = 90  # Longest lifetime a share may be minted with

    # FastAPI configuration
    fastapi_host: str = "0.0.0.0"
    fastapi_port: int = 8080
    idle_timeout: int = 120  # Seconds, used as the keep-alive timeout
    shutdown_timeout: int = 30  # Seconds allowed for in-flight requests on shutdown
    s3share_log_level: LogLevel = LogLevel.INFO

    @field_validator("s3share_log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            v_lower = v.lower()
            for level in LogLevel:
                if level.value == v_lower:
                    return level
            valid_levels = [level.value for level in LogLevel]
            raise ValueError(
                f"s3share_log_level must be one of {valid_levels}, got '{v}'"
            )
        raise ValueError(
            f"s3share_log_level must be a string or LogLevel enum, got {type(v)}"
        )

    @field_validator("storage_backend", "cache_backend", mode="before")
    @classmethod
    def normalize_backend(cls, v) -> str:
        return str(v).strip().lower()

    @field_validator("base_url", mode="after")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("max_age_days", mode="after")
    @classmethod
    def validate_max_age_days(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"max_age_days must be positive, got {v}")
        return v

    @model_validator(mode="after")
    def validate_backends(self) -> "Config":
        if self.storage_backend not in ("s3", "local"):
            raise ValueError(f"Unknown storage backend: {self.storage_backend}")
        if self.cache_backend not in ("redis", "memory"):
            raise ValueError(f"Unknown cache backend: {self.cache_backend}")
        if self.storage_backend == "s3" and not self.s3_bucket:
            raise ValueError("S3_BUCKET environment variable is required")
        return self

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@functools.lru_cache(maxsize=1)
def get_config() -> Config:
    try:
        return Config()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error while loading configuration: {e}", file=sys.stderr)
        sys.exit(1)
