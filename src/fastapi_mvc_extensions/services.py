"""Service resolution — ServiceCollection, ServiceProvider and constructor activation.

Services are registered against a type with a lifetime and resolved by
constructor injection: a constructor's type hints name the services it needs.
``create_factory()`` additionally lets a caller supply some constructor
arguments itself, which is how action constraints receive their declared
values alongside injected request-scoped services.
"""

from __future__ import annotations

import inspect
import logging
import threading
import types
import typing
from collections.abc import Callable, Hashable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, NamedTuple, Union

from starlette.requests import Request

from fastapi_mvc_extensions.exceptions import ResolutionError
from fastapi_mvc_extensions.request_id import RequestIdService
from fastapi_mvc_extensions.settings import MvcSettings, get_settings

logger = logging.getLogger(__name__)

ServiceFactory = Callable[["ServiceProvider"], Any]
ObjectFactory = Callable[["ServiceProvider", Sequence[Any]], Any]

_REQUEST_SERVICES_ATTR = "request_services"


class ServiceLifetime(Enum):
    """How long a resolved service instance lives."""

    SINGLETON = "singleton"
    SCOPED = "scoped"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class ServiceDescriptor:
    """Single service registration."""

    service_type: type
    factory: ServiceFactory
    lifetime: ServiceLifetime


class ServiceCollection:
    """Mutable set of service registrations, turned into a provider once built."""

    def __init__(self) -> None:
        self._descriptors: dict[type, ServiceDescriptor] = {}

    def add_singleton(
        self,
        service_type: type,
        factory: ServiceFactory | None = None,
        *,
        instance: Any = None,
    ) -> ServiceCollection:
        if instance is not None:
            factory = _constant(instance)
        return self._add(service_type, factory, ServiceLifetime.SINGLETON)

    def add_scoped(
        self, service_type: type, factory: ServiceFactory | None = None
    ) -> ServiceCollection:
        return self._add(service_type, factory, ServiceLifetime.SCOPED)

    def add_transient(
        self, service_type: type, factory: ServiceFactory | None = None
    ) -> ServiceCollection:
        return self._add(service_type, factory, ServiceLifetime.TRANSIENT)

    def _add(
        self,
        service_type: type,
        factory: ServiceFactory | None,
        lifetime: ServiceLifetime,
    ) -> ServiceCollection:
        if factory is None:
            factory = _activator(service_type)
        self._descriptors[service_type] = ServiceDescriptor(
            service_type=service_type, factory=factory, lifetime=lifetime
        )
        return self

    def __contains__(self, service_type: object) -> bool:
        return service_type in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def build_provider(self) -> ServiceProvider:
        return ServiceProvider(dict(self._descriptors))


class ServiceProvider:
    """Resolves registered services for the root or for one scope.

    Singletons are owned by the root provider and shared by every scope.
    Scoped services are created once per scope and cannot be resolved from
    the root.
    """

    def __init__(
        self,
        descriptors: Mapping[type, ServiceDescriptor],
        *,
        root: ServiceProvider | None = None,
        instances: Mapping[type, Any] | None = None,
    ) -> None:
        self._descriptors = descriptors
        self._root = root if root is not None else self
        self._instances: dict[type, Any] = dict(instances or {})
        self._lock = threading.RLock()

    @property
    def root(self) -> ServiceProvider:
        return self._root

    @property
    def is_root(self) -> bool:
        return self._root is self

    def create_scope(
        self, instances: Mapping[type, Any] | None = None
    ) -> ServiceProvider:
        logger.debug(
            "Creating service scope with %d seeded instance(s)", len(instances or {})
        )
        return ServiceProvider(self._descriptors, root=self._root, instances=instances)

    def get_service(self, service_type: Any) -> Any | None:
        if service_type is ServiceProvider:
            return self
        if service_type in self._instances:
            return self._instances[service_type]

        descriptor = self._descriptors.get(service_type)
        if descriptor is None:
            return None

        if descriptor.lifetime is ServiceLifetime.TRANSIENT:
            return descriptor.factory(self)
        if descriptor.lifetime is ServiceLifetime.SINGLETON:
            return self._root._get_or_create(descriptor)
        if self.is_root:
            raise ResolutionError(
                f"Cannot resolve scoped service '{_type_name(service_type)}' "
                "from the root provider.",
                service_type=service_type,
            )
        return self._get_or_create(descriptor)

    def get_required_service(self, service_type: Any) -> Any:
        service = self.get_service(service_type)
        if service is None:
            raise ResolutionError(
                f"No service for type '{_type_name(service_type)}' has been registered.",
                service_type=service_type,
            )
        return service

    def _get_or_create(self, descriptor: ServiceDescriptor) -> Any:
        with self._lock:
            if descriptor.service_type not in self._instances:
                self._instances[descriptor.service_type] = descriptor.factory(self)
            return self._instances[descriptor.service_type]


class _Binding(NamedTuple):
    name: str
    kind: Any
    annotation: Any
    default: Any
    argument_index: int | None


def create_factory(
    instance_type: type, argument_types: Sequence[type]
) -> ObjectFactory:
    """Build a reusable factory for ``instance_type``.

    Each constructor parameter whose annotation accepts one of
    ``argument_types`` is bound to the caller argument at that position; the
    remaining parameters are resolved from the provider passed to the factory.
    """
    type_name = _type_name(instance_type)
    try:
        signature = inspect.signature(instance_type)
        if instance_type.__init__ is object.__init__:
            hints: dict[str, Any] = {}
        else:
            hints = typing.get_type_hints(instance_type.__init__)
    except (NameError, TypeError, ValueError) as exc:
        raise ResolutionError(
            f"Cannot inspect the constructor of '{type_name}'.",
            service_type=instance_type,
        ) from exc

    bindings: list[_Binding] = []
    used: set[int] = set()
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        annotation = hints.get(param.name, Any)
        index = _match_argument(annotation, argument_types, used)
        if index is not None:
            used.add(index)
        bindings.append(
            _Binding(param.name, param.kind, annotation, param.default, index)
        )

    unmatched = [
        _type_name(arg_type)
        for index, arg_type in enumerate(argument_types)
        if index not in used
    ]
    if unmatched:
        raise ResolutionError(
            f"No constructor parameter of '{type_name}' accepts argument(s) "
            f"of type {', '.join(unmatched)}.",
            service_type=instance_type,
        )

    logger.debug("Created object factory for %s", type_name)

    def factory(provider: ServiceProvider, arguments: Sequence[Any]) -> Any:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for binding in bindings:
            if binding.argument_index is not None:
                value = arguments[binding.argument_index]
            else:
                value = _resolve_parameter(provider, binding, type_name)
                if value is inspect.Parameter.empty:
                    if binding.kind is not inspect.Parameter.POSITIONAL_ONLY:
                        continue
                    value = binding.default
            if binding.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[binding.name] = value
        return instance_type(*args, **kwargs)

    return factory


def create_instance(
    provider: ServiceProvider, instance_type: type, *arguments: Any
) -> Any:
    """Construct ``instance_type`` with ``arguments`` plus injected services."""
    factory = create_factory(instance_type, [type(arg) for arg in arguments])
    return factory(provider, arguments)


class FactoryCache:
    """Thread-safe memo of object factories keyed by type."""

    def __init__(self) -> None:
        self._factories: dict[Hashable, ObjectFactory] = {}
        self._lock = threading.Lock()

    def get_or_add(
        self, key: Hashable, create: Callable[[Hashable], ObjectFactory]
    ) -> ObjectFactory:
        factory = self._factories.get(key)
        if factory is not None:
            return factory
        with self._lock:
            factory = self._factories.get(key)
            if factory is None:
                factory = create(key)
                self._factories[key] = factory
            return factory

    def __contains__(self, key: object) -> bool:
        return key in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def clear(self) -> None:
        with self._lock:
            self._factories.clear()


def add_mvc_services(
    services: ServiceCollection, settings: MvcSettings | None = None
) -> ServiceCollection:
    """Register the services the built-in constraints depend on."""
    services.add_singleton(MvcSettings, instance=settings or get_settings())
    services.add_scoped(RequestIdService)
    return services


def get_request_services(
    request: Request, root: ServiceProvider | None = None
) -> ServiceProvider:
    """Return the service scope bound to ``request``, creating it on first use.

    A request has exactly one scope. Passing a ``root`` other than the one the
    cached scope was created from raises ``ResolutionError``.
    """
    scope: ServiceProvider | None = getattr(
        request.state, _REQUEST_SERVICES_ATTR, None
    )
    if scope is None:
        if root is None:
            root = _application_services(request)
        scope = root.create_scope({Request: request})
        setattr(request.state, _REQUEST_SERVICES_ATTR, scope)
    elif root is not None and scope.root is not root.root:
        raise ResolutionError(
            "The request service scope was created from a different provider.",
            service_type=ServiceProvider,
        )
    return scope


def _application_services(request: Request) -> ServiceProvider:
    app = request.scope.get("app")
    provider = getattr(getattr(app, "state", None), "services", None)
    if isinstance(provider, ServiceProvider):
        return provider
    return _default_provider()


@lru_cache
def _default_provider() -> ServiceProvider:
    return add_mvc_services(ServiceCollection()).build_provider()


def _constant(instance: Any) -> ServiceFactory:
    def factory(provider: ServiceProvider) -> Any:
        return instance

    return factory


def _activator(service_type: type) -> ServiceFactory:
    def factory(provider: ServiceProvider) -> Any:
        return create_instance(provider, service_type)

    return factory


def _match_argument(
    annotation: Any, argument_types: Sequence[type], used: set[int]
) -> int | None:
    for index, arg_type in enumerate(argument_types):
        if index not in used and _accepts(annotation, arg_type):
            return index
    return None


def _accepts(annotation: Any, arg_type: type) -> bool:
    if _is_union(annotation):
        return any(_accepts(member, arg_type) for member in typing.get_args(annotation))
    return isinstance(annotation, type) and issubclass(arg_type, annotation)


def _resolve_parameter(
    provider: ServiceProvider, binding: _Binding, type_name: str
) -> Any:
    service_type = binding.annotation
    optional = False
    if _is_union(service_type):
        members = [m for m in typing.get_args(service_type) if m is not type(None)]
        optional = len(members) < len(typing.get_args(service_type))
        service_type = members[0] if members else None

    service = provider.get_service(service_type) if isinstance(service_type, type) else None
    if service is not None:
        return service
    if binding.default is not inspect.Parameter.empty:
        return inspect.Parameter.empty
    if optional:
        return None
    raise ResolutionError(
        f"Unable to resolve service for type '{_type_name(binding.annotation)}' "
        f"while attempting to activate '{type_name}'.",
        service_type=binding.annotation,
    )


def _is_union(annotation: Any) -> bool:
    return typing.get_origin(annotation) in (Union, types.UnionType)


def _type_name(service_type: Any) -> str:
    return getattr(service_type, "__qualname__", None) or repr(service_type)
