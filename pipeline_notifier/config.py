"""Runtime configuration — env-driven via pydantic-settings.

Reads PIPELINE_NOTIFIER_* environment variables and an optional .env file.
A ``NotifierConfig`` is built once per Lambda cold start (or CLI run) and
handed to the forwarder, sinks and poller explicitly.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATADOG_API_BASE = "https://api.datadoghq.com/api/v1"


class NotifierConfig(BaseSettings):
    """Configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export PIPELINE_NOTIFIER_MONITORING_API_KEY=...
        export PIPELINE_NOTIFIER_CHAT_WEBHOOK_URL=https://hooks.slack.com/services/...
        export PIPELINE_NOTIFIER_REGION=eu-west-1
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PIPELINE_NOTIFIER_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Outbound services
    monitoring_api_key: str = ""
    monitoring_base_url: str = DATADOG_API_BASE
    chat_webhook_url: str = ""

    # Region used for the DescribeRegions call
    region: str = "us-east-1"

    # Fan-out and hardening
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    max_workers: int = Field(default=16, ge=1)

    log_level: str = "INFO"

    @property
    def monitoring_enabled(self) -> bool:
        return bool(self.monitoring_api_key)

    @property
    def chat_enabled(self) -> bool:
        return bool(self.chat_webhook_url)
