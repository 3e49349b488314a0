"""Derive the canonical log path of an action."""
from __future__ import annotations

from numbers import Number
from typing import Any, Iterable, Mapping, Tuple, Union

from .records import (
    ActionRecord,
    EmittingAction,
    PlainAction,
    ReturningAction,
    classify,
)

GLOBAL = "GLOBAL"


class CanonicalPath(tuple):
    """Ordered path segments: ``(base, identity, terminal, ...)``.

    Plain actions without printable extras only have two segments, so
    ``terminal`` may be ``None``.  ``is_async`` comes from the action's
    variant, not from the segment text: a plain action whose extras read
    ``SUCCESS`` is still plain.
    """

    def __new__(cls, segments: Iterable[Any], is_async: bool = False) -> "CanonicalPath":
        path = super().__new__(cls, (str(s) for s in segments))
        path._is_async = is_async
        return path

    @property
    def base(self) -> str:
        return self[0]

    @property
    def identity(self) -> str:
        return self[1]

    @property
    def terminal(self) -> str | None:
        return self[2] if len(self) > 2 else None

    @property
    def is_async(self) -> bool:
        return self._is_async

    def with_terminal(self, terminal: str) -> "CanonicalPath":
        """Return a sibling path ending in ``terminal``.

        A two segment path gets ``terminal`` appended instead.
        """
        return CanonicalPath((*self[:2], terminal, *self[3:]), is_async=self._is_async)

    def dotted(self) -> str:
        return ".".join(self)

    def __repr__(self) -> str:
        return f"CanonicalPath({self.dotted()!r})"


def parse_action_type(type_name: str) -> Tuple[str, str]:
    """Split ``SOME_THING_SUCCESS`` into ``("SOME_THING", "SUCCESS")``."""
    base, _, end = type_name.rpartition("_")
    return base, end


def identity_segment(action_id: Any) -> str:
    """Return ``ID_<ID>`` for a resource id or ``GLOBAL`` when absent."""
    if action_id is None:
        return GLOBAL
    return f"ID_{action_id}".upper()


def _is_printable(value: Any) -> bool:
    # bool is a Number subclass but never part of a path
    return isinstance(value, str) or (isinstance(value, Number) and not isinstance(value, bool))


def _segment_text(value: Any) -> str:
    # integral floats print without a fraction: 4.0 -> "4"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).upper()


def _returning_path(type_name: str, action_id: Any) -> CanonicalPath:
    base, end = parse_action_type(type_name)
    return CanonicalPath((base, identity_segment(action_id), end), is_async=True)


def _plain_path(action: PlainAction) -> CanonicalPath:
    specifiers = [_segment_text(v) for v in action.fields.values() if _is_printable(v)]
    segments = [action.type, identity_segment(action.id)]
    if specifiers:
        segments.append("_".join(specifiers))
    return CanonicalPath(segments)


def resolve_path(action: Union[ActionRecord, Mapping[str, Any]]) -> CanonicalPath:
    """Return the :class:`CanonicalPath` under which ``action`` is logged.

    >>> resolve_path({"type": "APPLES_SUCCESS", "meta": {"id": 46}}).dotted()
    'APPLES.ID_46.SUCCESS'

    Raises
    ------
    InvalidActionShape
        If ``action`` cannot be classified.
    """
    record = classify(action)
    if isinstance(record, ReturningAction):
        return _returning_path(record.type, record.id)
    if isinstance(record, PlainAction):
        return _plain_path(record)
    if isinstance(record, EmittingAction):
        first = record.first
        return _returning_path(first.type, first.id)
    raise TypeError(f"unexpected record {record!r}")  # pragma: no cover - classify is exhaustive
