"""Brief loading node - gathers product and feature context for the builder."""

import logging
import uuid

from langchain_core.runnables import RunnableConfig

from ..briefs import get_feature_brief, get_product_brief
from ..errors import InternalError, NotFoundError
from ..state import DispatchState

logger = logging.getLogger(__name__)


def load_briefs(state: DispatchState, config: RunnableConfig) -> DispatchState:
    """Fetch the product brief and the feature brief.

    Either lookup failing aborts the dispatch. A partial payload is never
    sent.
    """
    store = config["configurable"]["store"]
    try:
        feature_uuid = str(uuid.UUID(str(state["ticket"]["feature_uuid"])))
    except ValueError:
        feature_uuid = None

    feature = store.get_feature(feature_uuid) if feature_uuid else None
    if feature is None:
        raise NotFoundError(
            "Error retrieving feature details",
            errors=["Feature not found with the provided UUID"],
        )

    try:
        product_brief = get_product_brief(store, feature.workspace_uuid)
    except NotFoundError as e:
        logger.error(f"Product brief unavailable for feature {feature_uuid}: {e}")
        raise InternalError("Error retrieving product brief", errors=[e.message])

    try:
        feature_brief = get_feature_brief(store, feature_uuid)
    except NotFoundError as e:
        logger.error(f"Feature brief unavailable for feature {feature_uuid}: {e}")
        raise InternalError("Error retrieving feature brief", errors=[e.message])

    return {
        **state,
        "product_brief": product_brief,
        "feature_brief": feature_brief,
    }
