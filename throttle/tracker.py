"""Reducer-style hook that logs every action passing through a store."""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from .manager import RequestManager

TRACKING_SENTINEL = "This reducer is for tracking alone and does not return viable data."

# Store initialization actions are typed "@@INIT", "@@redux/INIT..." etc.
INIT_PREFIX = "@"


def action_tracker(
    ignored_prefixes: Iterable[str] = (),
    *,
    manager: RequestManager,
) -> Callable[[Any, Mapping[str, Any]], str]:
    """Build a reducer that writes each action to ``manager``'s log.

    ``manager`` owns the log the reducer writes to; pass the process-wide one.

    Actions whose type starts with ``@``, any of ``ignored_prefixes`` or any
    prefix configured in ``TRACK_IGNORE_PREFIXES`` are skipped, as are
    actions without a type.  The reducer always returns
    :data:`TRACKING_SENTINEL` since it holds no state of its own.
    """
    prefixes = (INIT_PREFIX, *ignored_prefixes, *manager.settings.track_ignore_prefixes)

    def reducer(state: Any, action: Mapping[str, Any]) -> str:
        type_name = action.get("type") if isinstance(action, Mapping) else None
        if isinstance(type_name, str) and not type_name.startswith(prefixes):
            manager.write_from_action(action)
        return TRACKING_SENTINEL

    return reducer
