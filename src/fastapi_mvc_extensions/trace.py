"""SelectionTrace and TraceEntry — debug recording of constraint evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True)
class TraceEntry:
    """Single constraint evaluation record."""

    constraint_name: str
    order: int
    action: Any
    duration_ms: float
    outcome: Literal["ACCEPTED", "REJECTED"]


@dataclass
class SelectionTrace:
    """Structured record of one candidate selection."""

    entries: list[TraceEntry] = field(default_factory=list)
    selected: list[Any] = field(default_factory=list)
    total_duration_ms: float = 0.0
