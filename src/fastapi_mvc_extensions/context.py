"""ActionCandidate and ActionConstraintContext — per-request selection state."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from starlette.requests import Request

if TYPE_CHECKING:
    from fastapi_mvc_extensions.constraint import ActionConstraint


@dataclass
class ActionCandidate:
    """An action that matched the route, with its realized constraints."""

    action: Any
    constraints: list[ActionConstraint] = field(default_factory=list)


@dataclass
class ActionConstraintContext:
    """State handed to every ``ActionConstraint.accept`` call."""

    request: Request
    candidates: Sequence[ActionCandidate] = ()
    current_candidate: ActionCandidate | None = None
    state: dict[str, Any] = field(default_factory=dict)
