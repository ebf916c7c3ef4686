"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from dm_inspect import __version__
from dm_inspect.registry.base import RegistryProvider
from dm_inspect.web.api import router


def create_app(registry: RegistryProvider) -> FastAPI:
    app = FastAPI(title="dm-inspect", version=__version__)
    app.state.registry = registry
    app.include_router(router)
    return app
