"""Environment configuration.

Variables:
    DATABASE_URL: PostgreSQL DSN. Unset means an in-memory store.
    HOST: Public base URL of this service, used for the review webhook.
    SWWFKEY: API key for the builder service.
    BUILDER_API_URL: Builder project endpoint.
    BUILDER_TIMEOUT_SECONDS: Timeout for builder requests.
"""

import os
from typing import Optional

from .errors import ConfigurationError

DEFAULT_BUILDER_API_URL = "https://api.stakwork.com/api/v1/projects"
DEFAULT_BUILDER_TIMEOUT = 30.0

BUILDER_WORKFLOW_NAME = "Hive Ticket Builder"
BUILDER_WORKFLOW_ID = 37324

REVIEW_WEBHOOK_PATH = "/bounties/ticket/review/"


def get_host(host: Optional[str] = None) -> str:
    """Public host of this service.

    Raises:
        ConfigurationError: HOST is not set
    """
    host = host or os.environ.get("HOST")
    if not host:
        raise ConfigurationError("HOST environment variable not set")
    return host


def review_webhook_url(host: Optional[str] = None) -> str:
    """Callback URL handed to the builder service."""
    return f"{get_host(host).rstrip('/')}{REVIEW_WEBHOOK_PATH}"


def get_builder_timeout() -> float:
    raw = os.environ.get("BUILDER_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_BUILDER_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"BUILDER_TIMEOUT_SECONDS is not a number: {raw!r}")
