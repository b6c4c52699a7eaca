"""FastAPI MVC Extensions - action constraints and HTML tag building for FastAPI."""

from fastapi_mvc_extensions.constraint import (
    ActionConstraint,
    ActionConstraintFactory,
    ActionConstraintMetadata,
)
from fastapi_mvc_extensions.constraints.request_scoped import (
    RequestScopedActionConstraint,
)
from fastapi_mvc_extensions.context import ActionCandidate, ActionConstraintContext
from fastapi_mvc_extensions.dependency import constraint_dependency, request_service
from fastapi_mvc_extensions.exceptions import (
    ActionNotMatched,
    ArgumentError,
    MvcException,
    ResolutionError,
)
from fastapi_mvc_extensions.rendering.attributes import AttributeDictionary
from fastapi_mvc_extensions.rendering.encoding import (
    HtmlEncoder,
    MarkupSafeHtmlEncoder,
)
from fastapi_mvc_extensions.rendering.tag_builder import (
    TagBuilder,
    TagRenderMode,
    create_sanitized_id,
)
from fastapi_mvc_extensions.request_id import RequestIdService
from fastapi_mvc_extensions.selection import realize_constraints, select_candidates
from fastapi_mvc_extensions.services import (
    FactoryCache,
    ServiceCollection,
    ServiceLifetime,
    ServiceProvider,
    add_mvc_services,
    create_factory,
    create_instance,
    get_request_services,
)
from fastapi_mvc_extensions.settings import MvcSettings, get_settings
from fastapi_mvc_extensions.trace import SelectionTrace, TraceEntry

__all__ = [
    "ActionCandidate",
    "ActionConstraint",
    "ActionConstraintContext",
    "ActionConstraintFactory",
    "ActionConstraintMetadata",
    "ActionNotMatched",
    "ArgumentError",
    "AttributeDictionary",
    "FactoryCache",
    "HtmlEncoder",
    "MarkupSafeHtmlEncoder",
    "MvcException",
    "MvcSettings",
    "RequestIdService",
    "RequestScopedActionConstraint",
    "ResolutionError",
    "SelectionTrace",
    "ServiceCollection",
    "ServiceLifetime",
    "ServiceProvider",
    "TagBuilder",
    "TagRenderMode",
    "TraceEntry",
    "add_mvc_services",
    "constraint_dependency",
    "create_factory",
    "create_instance",
    "create_sanitized_id",
    "get_request_services",
    "get_settings",
    "realize_constraints",
    "request_service",
    "select_candidates",
]
