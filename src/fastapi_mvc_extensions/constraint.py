"""ActionConstraint and ActionConstraintFactory abstract base classes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

from fastapi_mvc_extensions.context import ActionConstraintContext

if TYPE_CHECKING:
    from fastapi_mvc_extensions.services import ServiceProvider


class ActionConstraint(ABC):
    """Predicate used to pick among actions that match the same route.

    Constraints with a lower ``order`` are evaluated first.
    """

    @property
    def order(self) -> int:
        return 0

    @abstractmethod
    def accept(self, context: ActionConstraintContext) -> bool: ...


class ActionConstraintFactory(ABC):
    """Declaration realized into an ``ActionConstraint`` once per request."""

    @abstractmethod
    def create_instance(self, services: ServiceProvider) -> ActionConstraint: ...


ActionConstraintMetadata = Union[ActionConstraint, ActionConstraintFactory]
