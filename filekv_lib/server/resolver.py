from fastapi import HTTPException
from starlette.requests import Request

from filekv_lib.storage.base import PhysicalBackend


def resolve_backend(request: Request) -> PhysicalBackend:
    """Return the storage backend attached to the application.

    `create_app` stores it on `app.state.backend`; an app without one is a
    wiring error and answers HTTP 500.
    """
    backend = getattr(request.app.state, 'backend', None)
    if backend is None:
        raise HTTPException(status_code=500, detail={'error': 'no_backend', 'message': 'Storage backend not configured'})
    return backend
