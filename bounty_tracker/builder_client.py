"""HTTP client for the external ticket builder service."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import DEFAULT_BUILDER_API_URL, get_builder_timeout
from .errors import ConfigurationError, ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class BuilderResponse:
    """Raw acknowledgment from the builder service."""

    status_code: int
    body: str


class BuilderClient:
    """Submit job requests to the builder service.

    The builder works out-of-band and reports back through the review
    webhook embedded in the job request. Requests are sent once; retrying is
    left to the operator.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the builder client.

        Args:
            api_url: Project endpoint. Defaults to BUILDER_API_URL env var.
            api_key: API key. Defaults to SWWFKEY env var.
            timeout: Seconds before giving up. Defaults to BUILDER_TIMEOUT_SECONDS.
        """
        self.api_url = api_url or os.environ.get(
            "BUILDER_API_URL", DEFAULT_BUILDER_API_URL
        )
        self.api_key = api_key or os.environ.get("SWWFKEY")
        self.timeout = timeout if timeout is not None else get_builder_timeout()

    async def create_project(self, payload: dict) -> BuilderResponse:
        """Send a job request.

        Args:
            payload: Structured job request

        Returns:
            The builder's status code and raw body

        Raises:
            ConfigurationError: No API key configured
            ExternalServiceError: Transport failure, timeout or non-200 status
        """
        if not self.api_key:
            raise ConfigurationError("API key not set in environment")

        async with httpx.AsyncClient() as client:
            try:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={
                        "Authorization": f"Token token={self.api_key}",
                        "Content-Type": "application/json",
                    },
                    timeout=self.timeout,
                )
            except httpx.TimeoutException as e:
                logger.error(f"Builder request timed out after {self.timeout}s: {e}")
                raise ExternalServiceError(
                    "Error sending request to builder",
                    errors=[f"request timed out after {self.timeout}s"],
                )
            except httpx.HTTPError as e:
                logger.error(f"Builder request failed: {e}")
                raise ExternalServiceError(
                    "Error sending request to builder", errors=[str(e)]
                )

        if response.status_code != 200:
            logger.error(
                f"Builder returned status {response.status_code}",
                extra={"body": response.text[:500]},
            )
            raise ExternalServiceError(
                response.text,
                status_code=response.status_code,
                body=response.text,
                errors=[f"Builder API returned status code: {response.status_code}"],
            )

        return BuilderResponse(status_code=response.status_code, body=response.text)
