"""Request node - builds the structured job request for the builder."""

from langchain_core.runnables import RunnableConfig

from ..config import BUILDER_WORKFLOW_ID, BUILDER_WORKFLOW_NAME, review_webhook_url
from ..state import DispatchState, DispatchStatus


def build_request(state: DispatchState, config: RunnableConfig) -> DispatchState:
    """Assemble the job request, embedding the review callback URL.

    Raises:
        ConfigurationError: HOST is not configured
    """
    ticket = state["ticket"]
    webhook_url = review_webhook_url(config["configurable"].get("host"))

    job_request = {
        "name": BUILDER_WORKFLOW_NAME,
        "workflow_id": BUILDER_WORKFLOW_ID,
        "workflow_params": {
            "set_var": {
                "attributes": {
                    "vars": {
                        "featureUUID": ticket.get("feature_uuid", ""),
                        "phaseUUID": ticket.get("phase_uuid", ""),
                        "ticketUUID": state["ticket_uuid"],
                        "ticketName": ticket.get("name", ""),
                        "ticketDescription": ticket.get("description", ""),
                        "productBrief": state.get("product_brief", ""),
                        "featureBrief": state.get("feature_brief", ""),
                        "examples": "",
                        "webhook_url": webhook_url,
                    },
                },
            },
        },
    }

    return {
        **state,
        "job_request": job_request,
        "status": DispatchStatus.DISPATCHED.value,
    }
