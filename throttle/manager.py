"""Request deduplication on top of :class:`~log.tree.ActionLog`.

:class:`RequestManager` is the piece a host application talks to.  It
logs every action it dispatches under the action's canonical path and can
tell whether an equivalent request went out, or succeeded, recently enough
that sending it again is pointless.
"""
from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Union

from actions.paths import CanonicalPath, resolve_path
from actions.records import REQUEST, SUCCESS, ActionRecord, EmittingAction, classify
from log.tree import ActionLog
from settings import Settings

from .clock import Clock, seconds_since, to_iso, utc_now
from .logger import logger

Action = Union[ActionRecord, Mapping[str, Any]]
Dispatch = Callable[[Any], Any]


def _missing_dispatch(action: Any) -> None:
    logger.warning("RequestManager needs to be initialized with a dispatch function.")


class RequestManager:
    """Log, throttle and dispatch actions.

    Parameters
    ----------
    dispatch:
        Host function that actually sends an action down the pipeline.
    log:
        Shared :class:`ActionLog`; a private one is created when omitted.
    clock:
        Returns the current time as an aware :class:`datetime`.
    request_throttle_seconds, freshness_cutoff_seconds:
        Override the values from ``settings``.
    settings:
        Defaults to :meth:`Settings.from_env`.
    """

    def __init__(
        self,
        dispatch: Optional[Dispatch] = None,
        log: Optional[ActionLog] = None,
        clock: Clock = utc_now,
        request_throttle_seconds: Optional[float] = None,
        freshness_cutoff_seconds: Optional[float] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self.log = log if log is not None else ActionLog()
        self.clock = clock
        self.request_throttle_seconds = (
            request_throttle_seconds
            if request_throttle_seconds is not None
            else self.settings.request_throttle_seconds
        )
        self.freshness_cutoff_seconds = (
            freshness_cutoff_seconds
            if freshness_cutoff_seconds is not None
            else self.settings.freshness_cutoff_seconds
        )
        self._dispatch = dispatch or _missing_dispatch

    # --- Dispatch ---
    def _send(self, action: Action, dispatch_fn: Optional[Dispatch] = None) -> None:
        record = classify(action)
        path = self.write_from_action(record)
        if isinstance(record, EmittingAction):
            logger.debug(
                "Dispatching %s: %s %s headers=%s",
                path.dotted(), record.method, record.endpoint, record.headers,
            )
        else:
            logger.debug("Dispatching %s", path.dotted())
        (dispatch_fn or self._dispatch)(action)

    def dispatch(self, action: Action) -> None:
        """Log ``action`` and hand it to the dispatch function."""
        self._send(action)

    def dispatch_if_havent_already(self, action: Action) -> bool:
        """Dispatch ``action`` only if it has never been logged, whatever its age."""
        if self.read_from_action(action) is not None:
            logger.info("Already dispatched %s", self.path_for(action).dotted())
            return False
        self._send(action)
        return True

    def dispatch_if_not_throttled(self, action: Action, dispatch_fn: Optional[Dispatch] = None) -> bool:
        """Dispatch ``action`` unless the same request went out recently.

        Returns ``True`` when the action was dispatched.
        """
        if self.has_recent_attempt(action):
            logger.info("Throttled %s", self.path_for(action).dotted())
            return False
        self._send(action, dispatch_fn)
        return True

    def dispatch_if_stale(self, action: Action) -> bool:
        """Dispatch ``action`` unless its data is fresh or already requested."""
        if self.has_recent_success(action):
            logger.info("Fresh data for %s, skipping", self.path_for(action).dotted())
            return False
        return self.dispatch_if_not_throttled(action)

    # --- Recency checks ---
    def _is_recent(self, timestamp: Optional[str], cutoff_seconds: float) -> bool:
        if timestamp is None:
            return False
        elapsed = seconds_since(timestamp, self.clock)
        if elapsed is None:
            logger.debug("Ignoring non ISO-8601 timestamp %r", timestamp)
            return False
        return elapsed < cutoff_seconds

    def has_recent_attempt(self, action: Action, cutoff_seconds: Optional[float] = None) -> bool:
        """Return whether a request for ``action`` was logged within the cutoff.

        Async actions are checked against their REQUEST entry; plain
        actions against their own path.
        """
        if cutoff_seconds is None:
            cutoff_seconds = self.request_throttle_seconds
        path = self.path_for(action)
        if path.is_async:
            path = path.with_terminal(REQUEST)
        return self._is_recent(self.log.read(path), cutoff_seconds)

    def has_recent_success(self, action: Action, cutoff_seconds: Optional[float] = None) -> bool:
        """Return whether ``action`` succeeded within the freshness cutoff."""
        if cutoff_seconds is None:
            cutoff_seconds = self.freshness_cutoff_seconds
        return self._is_recent(self.read_from_action(action, SUCCESS), cutoff_seconds)

    # --- Action logging ---
    def path_for(self, action: Action) -> CanonicalPath:
        return resolve_path(action)

    def write_from_action(self, action: Action, timestamp: Optional[str] = None) -> CanonicalPath:
        """Log ``action`` and return the path it was written to.

        ``timestamp`` wins over the action's own ``now`` field, which wins
        over the clock.  Both explicit values are stored verbatim.
        """
        record = classify(action)
        path = resolve_path(record)
        if timestamp is None:
            timestamp = record.now if record.now is not None else to_iso(self.clock())
        self.log.write(path, timestamp)
        logger.debug("Wrote %s", path.dotted())
        return path

    def read_from_action(self, action: Action, override_terminal: Optional[str] = None) -> Optional[str]:
        """Return the logged timestamp for ``action``.

        With ``override_terminal`` the sibling entry ending in that segment
        is read instead, e.g. ``"SUCCESS"`` for a REQUEST action.
        """
        path = self.path_for(action)
        if override_terminal:
            path = path.with_terminal(override_terminal)
        return self.log.read(path)

    def remove_from_action(self, action: Action) -> None:
        self.log.remove(self.path_for(action))

    def flattened_logs(self) -> List[str]:
        return self.log.flatten(self.settings.log_delimiter)
