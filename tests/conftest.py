from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from actions.records import CALL_API
from log.tree import ActionLog
from settings import Settings
from throttle.manager import RequestManager


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def fake_api_action(action_id, type_base, now=None):
    """Outgoing API call shaped like the ones dispatched in production."""
    action = {
        CALL_API: {
            "endpoint": "https://someurl.com/api/" + (f"{action_id}/" if action_id else "") + type_base.lower(),
            "types": [
                {
                    "type": f"{type_base}_{end}",
                    "meta": {"id": action_id} if action_id else {},
                    "payload": {},
                }
                for end in ("REQUEST", "SUCCESS", "FAILURE")
            ],
            "headers": {
                "Authorization": "Bearer undefined",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        }
    }
    if now is not None:
        action["now"] = now
    return action


def fake_action(action_id, type_name, now=None):
    action = {"id": action_id, "type": type_name, "value": "Whatever", "value2": "Whatever2"}
    if now is not None:
        action["now"] = now
    return action


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def action_log() -> ActionLog:
    return ActionLog()


@pytest.fixture
def manager(action_log: ActionLog, clock: FakeClock) -> RequestManager:
    return RequestManager(log=action_log, clock=clock, settings=Settings())
