"""Helpers for constructing outgoing API call actions."""
from __future__ import annotations

from functools import partial
from typing import Any, Dict, Optional

from .records import ASYNC_TERMINALS, CALL_API

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def json_payload(meta: Dict[str, Any], action: Any = None, state: Any = None, response: Any = None) -> Dict[str, Any]:
    """Build the payload of a response action.

    Without ``response`` (the action is being dispatched) ``meta`` is
    returned as is.  Otherwise ``response`` must be a JSON response object
    exposing ``headers`` and ``json()``, such as :class:`requests.Response`,
    and its decoded body is merged over ``meta``.
    """
    if response is None:
        return meta
    content_type = response.headers.get("Content-Type")
    if not (content_type and "json" in content_type):
        raise ValueError("Invalid object received. Expected JSON.")
    return {**meta, **response.json()}


def _response(response_type: str, endpoint: str, meta: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": response_type,
        "meta": {"endpoint": endpoint, **meta},
        "payload": partial(json_payload, meta),
    }


def async_request_object(
    type_base: str,
    endpoint: str,
    meta: Optional[Dict[str, Any]] = None,
    method: str = "GET",
    header_additions: Optional[Dict[str, str]] = None,
    data: Any = None,
) -> Dict[str, Any]:
    """Return an outgoing API call action for ``type_base``.

    Parameters
    ----------
    type_base:
        Type prefix; the call gets ``<type_base>_REQUEST``, ``_SUCCESS`` and
        ``_FAILURE`` response descriptors, in that order.
    endpoint:
        URL the transport should call.
    meta:
        Extra metadata copied onto every descriptor.  An ``id`` key here
        becomes the identity segment of the logged path.
    method:
        HTTP method.
    header_additions:
        Headers merged over the JSON defaults.
    data:
        Request body; omitted from the call when ``None``.
    """
    meta = dict(meta or {})
    call: Dict[str, Any] = {
        "endpoint": endpoint,
        "method": method,
        "types": [_response(f"{type_base}_{end}", endpoint, meta) for end in ASYNC_TERMINALS],
        "headers": {**DEFAULT_HEADERS, **(header_additions or {})},
    }
    if data is not None:
        call["body"] = data
    return {CALL_API: call}
