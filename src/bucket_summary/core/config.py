"""Configuration management for bucket-summary."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "bucket-summary"
    log_json: bool = True

    bucket_name: str = ""
    max_concurrency: int = 10
    timeout: int = 300
    output_dir: str = "output"
    list_command: str = (
        "aws s3api list-objects-v2 --bucket {bucket} --delimiter / "
        "--query CommonPrefixes[].Prefix --output json"
    )
    report_command: str = "aws s3 ls s3://{bucket}/{prefix} --recursive --summarize"

    model_config = {
        "env_prefix": "BUCKET_SUMMARY_",
        "case_sensitive": False,
    }


settings = Settings()
