"""RequestScopedActionConstraint — match only a given request identifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from fastapi_mvc_extensions.constraint import (
    ActionConstraint,
    ActionConstraintFactory,
)
from fastapi_mvc_extensions.context import ActionConstraintContext
from fastapi_mvc_extensions.request_id import RequestIdService
from fastapi_mvc_extensions.services import (
    FactoryCache,
    ServiceProvider,
    create_factory,
)


@dataclass(frozen=True)
class RequestScopedActionConstraint(ActionConstraintFactory):
    """Only matches when the current request id equals ``request_id``.

    The declaration is immutable and shared across requests; each call to
    ``create_instance`` builds an evaluator bound to the request scope's
    ``RequestIdService``.
    """

    request_id: str | None

    _factories: ClassVar[FactoryCache] = FactoryCache()

    def create_instance(self, services: ServiceProvider) -> ActionConstraint:
        factory = self._factories.get_or_add(
            _RequestIdConstraint,
            lambda constraint_type: create_factory(constraint_type, (str,)),
        )
        constraint: ActionConstraint = factory(services, (self.request_id,))
        return constraint


class _RequestIdConstraint(ActionConstraint):
    def __init__(
        self, request_id_service: RequestIdService, request_id: str | None
    ) -> None:
        self._request_id_service = request_id_service
        self._request_id = request_id

    def accept(self, context: ActionConstraintContext) -> bool:
        return self._request_id == self._request_id_service.request_id
