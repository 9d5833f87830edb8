"""Ticket dispatch workflow.

Dispatch is a small LangGraph workflow:

    validate -> [load_briefs] -> build_request -> send_to_builder

``load_briefs`` runs only for tickets tied to a feature. The store, builder
client and host are passed per run through ``config["configurable"]`` so the
compiled graph holds no process-wide state.

Dispatch never modifies the local ticket. From the caller's point of view it
either succeeds (the builder acknowledged the job and the ticket is awaiting
review) or fails with nothing changed.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .builder_client import BuilderClient
from .errors import ExternalServiceError
from .state import DispatchState, DispatchStatus

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Successful dispatch: the ticket id and the builder's raw acknowledgment."""

    ticket_id: str
    message: str
    status: DispatchStatus = DispatchStatus.AWAITING_REVIEW


def build_dispatch_graph():
    """Build and compile the dispatch graph."""
    from langgraph.graph import StateGraph, END

    from .nodes import (
        validate_ticket,
        route_after_validate,
        load_briefs,
        build_request,
        send_to_builder,
    )

    workflow = StateGraph(DispatchState)

    workflow.add_node("validate", validate_ticket)
    workflow.add_node("load_briefs", load_briefs)
    workflow.add_node("build_request", build_request)
    workflow.add_node("send_to_builder", send_to_builder)

    workflow.set_entry_point("validate")

    workflow.add_conditional_edges(
        "validate",
        route_after_validate,
        {
            "load_briefs": "load_briefs",
            "build_request": "build_request",
        },
    )

    workflow.add_edge("load_briefs", "build_request")
    workflow.add_edge("build_request", "send_to_builder")
    workflow.add_edge("send_to_builder", END)

    return workflow.compile()


class Dispatcher:
    """Send tickets to the builder service.

    Args:
        store: Store used to look up features and briefs
        builder: Builder client. Defaults to one configured from the environment.
        host: Public host for the review webhook. Defaults to the HOST env var.
    """

    def __init__(
        self,
        store,
        builder: Optional[BuilderClient] = None,
        host: Optional[str] = None,
    ):
        self.store = store
        self.builder = builder or BuilderClient()
        self.host = host
        self.graph = build_dispatch_graph()

    async def dispatch(self, ticket: Dict[str, Any]) -> DispatchResult:
        """Run the dispatch workflow for a ticket body.

        Args:
            ticket: Ticket fields as submitted (uuid, feature_uuid, phase_uuid,
                name, description)

        Returns:
            DispatchResult echoing the ticket id and the builder's response

        Raises:
            ValidationError: missing or malformed ticket uuid
            NotFoundError: the ticket's feature does not exist
            InternalError: a brief could not be loaded
            ConfigurationError: HOST or the builder API key is missing
            ExternalServiceError: the builder rejected or never answered
        """
        initial_state: DispatchState = {
            "ticket": ticket,
            "status": DispatchStatus.CREATED.value,
        }
        config = {
            "configurable": {
                "store": self.store,
                "builder": self.builder,
                "host": self.host,
            }
        }

        final = await self.graph.ainvoke(initial_state, config)

        if final["status"] == DispatchStatus.DISPATCH_FAILED.value:
            raise ExternalServiceError(
                final.get("message", ""),
                status_code=final.get("response_status"),
                body=final.get("response_body", ""),
                errors=final.get("errors", []),
            )

        return DispatchResult(
            ticket_id=final["ticket_uuid"],
            message=final.get("response_body", ""),
        )
