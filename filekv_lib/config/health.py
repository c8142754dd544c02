"""Liveness report for the HTTP server.

`get_health` is what ``GET /api/health`` returns: package version, which
storage backend the app was built with, and how long the process has run.
"""
from datetime import datetime, timezone
import time

from filekv_lib import __version__

_STARTED_AT = time.time()


def get_health(backend: str = "unknown") -> dict:
    started = datetime.fromtimestamp(_STARTED_AT, tz=timezone.utc)
    return {
        "status": "ok",
        "version": __version__,
        "backend": backend,
        "start_time": started.isoformat(),
        "uptime_seconds": int(time.time() - _STARTED_AT),
    }
