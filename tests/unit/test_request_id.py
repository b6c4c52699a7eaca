"""Tests for RequestIdService."""

from __future__ import annotations

import uuid
from typing import Any

from fastapi_mvc_extensions.request_id import RequestIdService
from fastapi_mvc_extensions.settings import MvcSettings


class TestRequestIdService:
    def test_uses_request_header(self, make_request: Any, settings: MvcSettings) -> None:
        request = make_request(headers={"RequestId": "abc"})
        assert RequestIdService(request, settings).request_id == "abc"

    def test_header_is_case_sensitive_value(
        self, make_request: Any, settings: MvcSettings
    ) -> None:
        request = make_request(headers={"RequestId": "ABC"})
        assert RequestIdService(request, settings).request_id == "ABC"

    def test_generates_id_when_header_missing(
        self, make_request: Any, settings: MvcSettings
    ) -> None:
        service = RequestIdService(make_request(), settings)
        assert uuid.UUID(service.request_id)

    def test_generates_id_when_header_empty(
        self, make_request: Any, settings: MvcSettings
    ) -> None:
        service = RequestIdService(make_request(headers={"RequestId": ""}), settings)
        assert service.request_id != ""

    def test_generated_ids_differ_per_request(
        self, make_request: Any, settings: MvcSettings
    ) -> None:
        first = RequestIdService(make_request(), settings)
        second = RequestIdService(make_request(), settings)
        assert first.request_id != second.request_id

    def test_stable_for_instance(self, make_request: Any, settings: MvcSettings) -> None:
        service = RequestIdService(make_request(), settings)
        assert service.request_id == service.request_id

    def test_custom_header_name(self, make_request: Any) -> None:
        settings = MvcSettings(request_id_header="X-Request-Id")
        request = make_request(headers={"X-Request-Id": "xyz", "RequestId": "abc"})
        assert RequestIdService(request, settings).request_id == "xyz"

    def test_stable_within_request_scope(self, request_scope: Any) -> None:
        scope = request_scope()
        first = scope.get_required_service(RequestIdService)
        second = scope.get_required_service(RequestIdService)
        assert first is second
