"""FastAPI router for inspecting and editing the action log."""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Request
from pydantic import BaseModel

from actions.records import InvalidActionShape
from limiter import limiter
from settings import Settings
from throttle.manager import RequestManager

dashboard_router = APIRouter(prefix="/logs", tags=["Action log"])
_state: dict[str, object] = {}

MUTATION_LIMIT = Settings.from_env().inspect_rate_limit


class LogEntries(BaseModel):
    entries: List[str]


class PathLookup(BaseModel):
    path: List[str]
    timestamp: Optional[str] = None


def set_state(manager: RequestManager) -> None:
    """Inject the request manager whose log the routes expose."""
    _state["manager"] = manager


def _manager() -> RequestManager:
    manager = _state.get("manager")
    if manager is None:
        raise HTTPException(status_code=500, detail="request manager not configured")
    return manager  # type: ignore[return-value]


@dashboard_router.get("", response_model=LogEntries)
async def list_logs() -> LogEntries:
    """Return every flattened log entry, sorted."""
    return LogEntries(entries=sorted(_manager().flattened_logs()))


@dashboard_router.get("/tree")
async def log_tree() -> Dict[str, Any]:
    return _manager().log.tree


@dashboard_router.post("/path", response_model=PathLookup)
async def lookup_path(action: Dict[str, Any] = Body(...)) -> PathLookup:
    """Resolve the path of ``action`` and return its logged timestamp."""
    manager = _manager()
    try:
        path = manager.path_for(action)
    except InvalidActionShape as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return PathLookup(path=list(path), timestamp=manager.log.read(path))


@dashboard_router.post("/actions", response_model=PathLookup)
@limiter.limit(MUTATION_LIMIT)
async def record_action(request: Request, action: Dict[str, Any] = Body(...)) -> PathLookup:
    """Write ``action`` to the log as if it had been dispatched."""
    manager = _manager()
    try:
        path = manager.write_from_action(action)
    except InvalidActionShape as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return PathLookup(path=list(path), timestamp=manager.log.read(path))


@dashboard_router.delete("/{dotted_path}")
@limiter.limit(MUTATION_LIMIT)
async def remove_log(request: Request, dotted_path: str) -> dict:
    """Remove the entry or subtree at a dotted path such as ``APPLES.ID_1``."""
    try:
        _manager().log.remove(dotted_path)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"removed": dotted_path}


@dashboard_router.post("/reset")
@limiter.limit(MUTATION_LIMIT)
async def reset_logs(request: Request) -> dict:
    _manager().log.reset()
    return {"status": "reset"}
