"""Product and feature briefs sent to the builder as context."""

from .errors import NotFoundError
from .models import Feature, Workspace


def format_product_brief(workspace: Workspace) -> str:
    return (
        f"Mission: {workspace.mission}.\n\n"
        f"Tactics and Objectives: {workspace.tactics}."
    )


def format_feature_brief(feature: Feature) -> str:
    return (
        f"Feature: {feature.name}.\n\n"
        f"Brief: {feature.brief}.\n\n"
        f"Requirements: {feature.requirements}.\n\n"
        f"Architecture: {feature.architecture}."
    )


def get_product_brief(store, workspace_uuid: str) -> str:
    """Brief of the workspace that owns a feature.

    Raises:
        NotFoundError: unknown workspace
    """
    workspace = store.get_workspace(workspace_uuid)
    if workspace is None:
        raise NotFoundError("workspace not found")
    return format_product_brief(workspace)


def get_feature_brief(store, feature_uuid: str) -> str:
    """Brief of a single feature.

    Raises:
        NotFoundError: unknown feature
    """
    feature = store.get_feature(feature_uuid)
    if feature is None:
        raise NotFoundError("feature not found")
    return format_feature_brief(feature)
