"""Action record model and canonical path derivation."""

from .builders import async_request_object, json_payload
from .paths import CanonicalPath, identity_segment, parse_action_type, resolve_path
from .records import (
    CALL_API,
    EmittingAction,
    InvalidActionShape,
    PlainAction,
    ResponseDescriptor,
    ReturningAction,
    classify,
)

__all__ = [
    "CALL_API",
    "CanonicalPath",
    "EmittingAction",
    "InvalidActionShape",
    "PlainAction",
    "ResponseDescriptor",
    "ReturningAction",
    "classify",
    "identity_segment",
    "parse_action_type",
    "resolve_path",
    "async_request_object",
    "json_payload",
]
