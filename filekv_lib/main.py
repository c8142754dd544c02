"""Application factory for the filekv FastAPI app.

This module exposes `create_app(config) -> FastAPI` which performs all setup
(backend construction, router registration). Nothing happens at import time
so tests can construct isolated apps.

To create an app for production or local runs:

    from filekv_lib.main import create_app
    from filekv_lib.config import load_config
    app = create_app(load_config())

Note: we intentionally do not create a global `app` at import time.
"""
import logging
from typing import Optional

from fastapi import FastAPI

from filekv_lib import __version__
from filekv_lib.config.config import ServerConfig
from filekv_lib.storage import PhysicalBackend, create_backend

logger = logging.getLogger(__name__)


def create_app(config: ServerConfig, backend: Optional[PhysicalBackend] = None) -> FastAPI:
    """Create and return a configured FastAPI application.

    When `backend` is given it is used as-is; otherwise one is built from
    `config.backend` and `config.backend_options()`.
    """
    if backend is None:
        backend = create_backend(config.backend, config.backend_options())
    logger.info("Using %s storage backend", config.backend)

    app = FastAPI(title="filekv", version=__version__)
    app.state.backend = backend
    app.state.backend_kind = config.backend

    # Router registration: import here to avoid import-time side-effects
    from filekv_lib.server.api import router as server_router
    app.include_router(server_router, prefix='/api')

    return app
