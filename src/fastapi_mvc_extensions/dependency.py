"""constraint_dependency() — FastAPI dependencies guarding routes with constraints."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import HTTPException
from starlette.requests import Request

from fastapi_mvc_extensions.constraint import ActionConstraintMetadata
from fastapi_mvc_extensions.context import ActionCandidate, ActionConstraintContext
from fastapi_mvc_extensions.exceptions import ActionNotMatched
from fastapi_mvc_extensions.selection import realize_constraints, select_candidates
from fastapi_mvc_extensions.services import ServiceProvider, get_request_services
from fastapi_mvc_extensions.settings import get_settings
from fastapi_mvc_extensions.trace import SelectionTrace

T = TypeVar("T")


def constraint_dependency(
    *constraints: ActionConstraintMetadata,
    services: ServiceProvider | None = None,
    status_code: int | None = None,
    debug: bool | None = None,
) -> Callable[..., Awaitable[ActionConstraintContext]]:
    """Return a FastAPI-compatible dependency that evaluates the constraints.

    Constraint factories are realized against the request's service scope on
    every call. A rejected request raises ``HTTPException`` with
    ``status_code`` (``MvcSettings.constraint_status_code`` by default).
    """
    settings = get_settings()
    declared = tuple(constraints)
    rejected_status = (
        status_code if status_code is not None else settings.constraint_status_code
    )
    record_trace = settings.debug if debug is None else debug

    async def dependency(request: Request) -> ActionConstraintContext:
        scope = get_request_services(request, services)
        candidate = ActionCandidate(
            action=request.scope.get("endpoint"),
            constraints=realize_constraints(declared, scope),
        )
        ctx = ActionConstraintContext(
            request=request, candidates=[candidate], current_candidate=candidate
        )
        trace = SelectionTrace() if record_trace else None
        if trace is not None:
            ctx.state["trace"] = trace

        if not select_candidates([candidate], request, trace=trace):
            exc = ActionNotMatched(status_code=rejected_status)
            raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc

        return ctx

    # Attached for introspection by route builders
    dependency._action_constraints = declared  # type: ignore[attr-defined]

    return dependency


def request_service(
    service_type: type[T], *, services: ServiceProvider | None = None
) -> Callable[..., Awaitable[T]]:
    """Return a dependency resolving ``service_type`` from the request scope."""

    async def dependency(request: Request) -> Any:
        return get_request_services(request, services).get_required_service(
            service_type
        )

    return dependency
