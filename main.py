"""Entry point for the action throttle.

Provides a CLI that prints the canonical log path of an action and a REST
API for inspecting a live action log.

Warning: the API has no authentication; serve it on localhost/LAN only.
"""

import argparse
import json
import sys
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from actions.records import InvalidActionShape
from actions.paths import resolve_path
from dashboard import dashboard_router, set_state
from limiter import limiter
from settings import Settings
from throttle.logger import configure
from throttle.manager import RequestManager

settings = Settings.from_env()
configure(settings.log_level)

app = FastAPI(title="Action Throttle", description="Request deduplication log")
app.include_router(dashboard_router)

# One manager (and log) per process, shared by every route
request_manager = RequestManager(settings=settings)
set_state(request_manager)

# --- Rate Limiting ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(InvalidActionShape)
async def invalid_action_handler(request: Request, exc: InvalidActionShape) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/status")
async def status_endpoint() -> dict:
    return {"status": "ok", "entries": len(request_manager.log)}


# --- CLI Mode ---
def cli_mode(raw: Optional[str]) -> int:
    """Print the dotted log path of a JSON action."""
    raw = raw if raw else sys.stdin.read()
    try:
        action = json.loads(raw)
        path = resolve_path(action)
    except (json.JSONDecodeError, InvalidActionShape) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(path.dotted())
    return 0


# --- Entrypoint ---
def main(argv: Optional[List[str]] = None) -> int:
    """Parse command-line arguments and run CLI mode or the REST API."""
    parser = argparse.ArgumentParser(description="Action throttle log")
    parser.add_argument(
        "action", nargs="?", help="JSON action to resolve (read from stdin when omitted)"
    )
    parser.add_argument(
        "--api", action="store_true", help="Run the inspection API instead of CLI"
    )
    args = parser.parse_args(argv)

    if args.api:
        import uvicorn

        uvicorn.run("main:app", host="127.0.0.1", port=settings.port, reload=False)
        return 0
    return cli_mode(args.action)


if __name__ == "__main__":
    sys.exit(main())
