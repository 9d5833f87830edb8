"""Dispatch graph node implementations."""

from .validate import validate_ticket, route_after_validate
from .context import load_briefs
from .request import build_request
from .send import send_to_builder

__all__ = [
    "validate_ticket",
    "route_after_validate",
    "load_briefs",
    "build_request",
    "send_to_builder",
]
