"""Shared pytest fixtures for fastapi-mvc-extensions tests."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from starlette.requests import Request

from fastapi_mvc_extensions.services import (
    ServiceCollection,
    ServiceProvider,
    add_mvc_services,
)
from fastapi_mvc_extensions.settings import MvcSettings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_request() -> Any:
    """Factory for creating mock Starlette Request objects."""

    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        query_string: str = "",
    ) -> Request:
        scope: dict[str, Any] = {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": query_string.encode(),
            "headers": [
                (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
            ],
            "root_path": "",
        }
        return Request(scope)

    return _make


@pytest.fixture
def settings() -> MvcSettings:
    return MvcSettings(request_id_header="RequestId")


@pytest.fixture
def root_services(settings: MvcSettings) -> ServiceProvider:
    """Root provider with the built-in MVC services registered."""
    return add_mvc_services(ServiceCollection(), settings).build_provider()


@pytest.fixture
def request_scope(root_services: ServiceProvider, make_request: Any) -> Any:
    """Factory for a request scope whose RequestId header is ``request_id``."""

    def _make(request_id: str | None = None) -> ServiceProvider:
        headers = {"RequestId": request_id} if request_id is not None else {}
        request = make_request(headers=headers)
        return root_services.create_scope({Request: request})

    return _make
