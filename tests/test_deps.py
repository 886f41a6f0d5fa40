"""Tests for the FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from railway_env import RailwayHeadersMiddleware, headers_from_context, must_load
from railway_env.deps import RAILWAY_ENV_STATE_ATTR, RailwayEnvDep, RailwayHeadersDep


def create_app(*, environ: dict[str, str] | None, with_middleware: bool) -> FastAPI:
    """App exposing both dependencies.

    Args:
        environ: Railway environment stored on app.state at startup, or None
            to store nothing.
        with_middleware: Whether to install RailwayHeadersMiddleware.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if environ is not None:
            setattr(app.state, RAILWAY_ENV_STATE_ATTR, must_load(environ))
        yield

    app = FastAPI(lifespan=lifespan)

    @app.get("/env")
    async def env_endpoint(env: RailwayEnvDep) -> dict[str, Any]:
        return {"project_id": env.project_id, "tcp_proxy_port": env.tcp_proxy_port}

    @app.get("/headers")
    async def headers_endpoint(headers: RailwayHeadersDep) -> dict[str, Any]:
        _, stored = headers_from_context()
        return {"request_id": headers.railway_request_id, "stored": stored}

    if with_middleware:
        app.add_middleware(RailwayHeadersMiddleware)
    return app


class TestRailwayEnvDep:
    """Tests for get_railway_env."""

    def test_returns_env_stored_at_startup(self) -> None:
        app = create_app(
            environ={"RAILWAY_PROJECT_ID": "proj1", "RAILWAY_TCP_PROXY_PORT": "11105"},
            with_middleware=False,
        )

        with TestClient(app) as client:
            response = client.get("/env")

        assert response.status_code == 200
        assert response.json() == {"project_id": "proj1", "tcp_proxy_port": 11105}

    def test_503_when_env_not_stored(self) -> None:
        app = create_app(environ=None, with_middleware=False)

        with TestClient(app) as client:
            response = client.get("/env")

        assert response.status_code == 503
        assert response.json()["detail"] == "Railway environment not loaded"

    def test_503_when_state_holds_something_else(self) -> None:
        app = create_app(environ=None, with_middleware=False)
        setattr(app.state, RAILWAY_ENV_STATE_ATTR, {"RAILWAY_PROJECT_ID": "proj1"})

        with TestClient(app) as client:
            response = client.get("/env")

        assert response.status_code == 503


class TestRailwayHeadersDep:
    """Tests for get_railway_headers."""

    @pytest.mark.parametrize(("with_middleware", "stored"), [(True, True), (False, False)])
    def test_returns_headers(self, with_middleware: bool, stored: bool) -> None:
        """Works with or without the middleware; only the storage differs."""
        app = create_app(environ=None, with_middleware=with_middleware)

        with TestClient(app) as client:
            response = client.get("/headers", headers={"X-Railway-Request-Id": "abc123"})

        assert response.status_code == 200
        assert response.json() == {"request_id": "abc123", "stored": stored}
