"""Typed action records flowing through the dispatch pipeline.

Actions arrive as plain mappings (the shape a dispatch pipeline hands
around).  :func:`classify` turns such a mapping into exactly one of three
variants so the rest of the package never has to probe fields:

``EmittingAction``
    An API call about to go out.  It has no ``type`` of its own but carries
    the list of response descriptors under the :data:`CALL_API` key.
``ReturningAction``
    A response that has arrived, typed ``<BASE>_REQUEST``,
    ``<BASE>_SUCCESS`` or ``<BASE>_FAILURE``.
``PlainAction``
    Any other synchronous action.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

CALL_API = "@@redux-api-middleware/RSAA"

REQUEST = "REQUEST"
SUCCESS = "SUCCESS"
FAILURE = "FAILURE"
ASYNC_TERMINALS = (REQUEST, SUCCESS, FAILURE)

# Fields that never contribute to a plain action's path.
RESERVED_FIELDS = frozenset({"type", "id", "siteID", "now"})


class InvalidActionShape(ValueError):
    """Raised when a record is neither a typed action nor an API call."""

    def __init__(self, record: Any, reason: str = "") -> None:
        self.record = record
        message = "action has neither a type nor a list of response types"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def has_async_terminal(type_name: str) -> bool:
    """Return ``True`` if ``type_name`` ends in a lifecycle suffix."""
    base, _, end = type_name.rpartition("_")
    return bool(base) and end in ASYNC_TERMINALS


@dataclass(frozen=True)
class ResponseDescriptor:
    """One candidate response of an outgoing API call."""

    type: str
    meta: Dict[str, Any] = field(default_factory=dict)
    payload: Any = None

    @property
    def id(self) -> Any:
        return self.meta.get("id")

    @classmethod
    def from_raw(cls, raw: Union[str, Mapping[str, Any]]) -> "ResponseDescriptor":
        if isinstance(raw, str):
            return cls(type=raw)
        if isinstance(raw, Mapping) and isinstance(raw.get("type"), str):
            return cls(type=raw["type"], meta=dict(raw.get("meta") or {}), payload=raw.get("payload"))
        raise InvalidActionShape(raw, "response descriptor without a type")


@dataclass(frozen=True)
class EmittingAction:
    """An API call that has not been sent yet."""

    types: List[ResponseDescriptor]
    endpoint: Optional[str] = None
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    now: Optional[str] = None

    @property
    def first(self) -> ResponseDescriptor:
        return self.types[0]


@dataclass(frozen=True)
class ReturningAction:
    """A REQUEST, SUCCESS or FAILURE response action."""

    type: str
    meta: Dict[str, Any] = field(default_factory=dict)
    payload: Any = None
    now: Optional[str] = None

    @property
    def id(self) -> Any:
        return self.meta.get("id")


@dataclass(frozen=True)
class PlainAction:
    """A synchronous action with arbitrary extra fields.

    ``fields`` keeps every non-reserved field in the order it appeared on
    the incoming mapping; that order decides the path's final segment.
    """

    type: str
    id: Any = None
    fields: Dict[str, Any] = field(default_factory=dict)
    now: Optional[str] = None


ActionRecord = Union[EmittingAction, ReturningAction, PlainAction]


def classify(record: Union[ActionRecord, Mapping[str, Any]]) -> ActionRecord:
    """Return the typed variant of ``record``.

    Already classified records are returned unchanged.  Mappings are
    checked in order: a lifecycle-suffixed ``type`` makes a
    :class:`ReturningAction`, any other ``type`` a :class:`PlainAction`,
    and a :data:`CALL_API` entry an :class:`EmittingAction`.

    Raises
    ------
    InvalidActionShape
        If ``record`` matches none of the variants.
    """
    if isinstance(record, (EmittingAction, ReturningAction, PlainAction)):
        return record
    if not isinstance(record, Mapping):
        raise InvalidActionShape(record, f"unsupported record type {type(record).__name__}")

    now = record.get("now")
    type_name = record.get("type")
    if isinstance(type_name, str) and type_name:
        if has_async_terminal(type_name):
            return ReturningAction(
                type=type_name,
                meta=dict(record.get("meta") or {}),
                payload=record.get("payload"),
                now=now,
            )
        site_id = record.get("siteID")
        return PlainAction(
            type=type_name,
            id=site_id if site_id is not None else record.get("id"),
            fields={k: v for k, v in record.items() if k not in RESERVED_FIELDS},
            now=now,
        )

    call = record.get(CALL_API)
    if isinstance(call, Mapping):
        raw_types = call.get("types") or []
        if not raw_types:
            raise InvalidActionShape(record, "empty response type list")
        return EmittingAction(
            types=[ResponseDescriptor.from_raw(t) for t in raw_types],
            endpoint=call.get("endpoint"),
            method=call.get("method", "GET"),
            headers=dict(call.get("headers") or {}),
            body=call.get("body"),
            now=now,
        )

    raise InvalidActionShape(record)
