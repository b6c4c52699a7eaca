"""Built-in action constraints."""

from fastapi_mvc_extensions.constraints.request_scoped import (
    RequestScopedActionConstraint,
)

__all__ = [
    "RequestScopedActionConstraint",
]
