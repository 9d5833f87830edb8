"""Send node - hands the job request to the builder service."""

import logging

from langchain_core.runnables import RunnableConfig

from ..errors import ExternalServiceError
from ..state import DispatchState, DispatchStatus

logger = logging.getLogger(__name__)


async def send_to_builder(
    state: DispatchState, config: RunnableConfig
) -> DispatchState:
    """Submit the job request once.

    A failed or timed-out request ends the workflow in DISPATCH_FAILED with
    the builder's response kept for diagnostics. Nothing is retried.
    """
    builder = config["configurable"]["builder"]

    try:
        response = await builder.create_project(state["job_request"])
    except ExternalServiceError as e:
        logger.warning(
            f"Dispatch of ticket {state['ticket_uuid']} failed: {e.message}"
        )
        return {
            **state,
            "status": DispatchStatus.DISPATCH_FAILED.value,
            "response_status": e.status_code,
            "response_body": e.body,
            "message": e.message,
            "errors": e.errors,
        }

    logger.info(f"Dispatched ticket {state['ticket_uuid']} to builder")
    return {
        **state,
        "status": DispatchStatus.AWAITING_REVIEW.value,
        "response_status": response.status_code,
        "response_body": response.body,
        "message": response.body,
        "errors": [],
    }
