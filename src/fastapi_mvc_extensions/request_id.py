"""RequestIdService — request-scoped identifier provider."""

from __future__ import annotations

import uuid

from starlette.requests import Request

from fastapi_mvc_extensions.settings import MvcSettings


class RequestIdService:
    """Identifier of the current request, fixed for the lifetime of its scope.

    Taken from the configured request header when the client sends one,
    otherwise generated.
    """

    def __init__(self, request: Request, settings: MvcSettings) -> None:
        supplied = request.headers.get(settings.request_id_header)
        self._request_id = supplied or str(uuid.uuid4())

    @property
    def request_id(self) -> str:
        return self._request_id
