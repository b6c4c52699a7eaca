"""Action selection — realize constraint metadata and filter candidates."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

from starlette.requests import Request

from fastapi_mvc_extensions.constraint import (
    ActionConstraint,
    ActionConstraintFactory,
    ActionConstraintMetadata,
)
from fastapi_mvc_extensions.context import ActionCandidate, ActionConstraintContext
from fastapi_mvc_extensions.exceptions import ArgumentError
from fastapi_mvc_extensions.services import ServiceProvider
from fastapi_mvc_extensions.trace import SelectionTrace, TraceEntry

logger = logging.getLogger(__name__)


def realize_constraints(
    metadata: Iterable[ActionConstraintMetadata], services: ServiceProvider
) -> list[ActionConstraint]:
    """Turn declared constraint metadata into constraints for one request."""
    constraints: list[ActionConstraint] = []
    for item in metadata:
        if isinstance(item, ActionConstraintFactory):
            constraints.append(item.create_instance(services))
        elif isinstance(item, ActionConstraint):
            constraints.append(item)
        else:
            raise ArgumentError(
                f"Unsupported action constraint metadata: {item!r}",
                param_name="metadata",
            )
    return constraints


def select_candidates(
    candidates: Sequence[ActionCandidate],
    request: Request,
    *,
    trace: SelectionTrace | None = None,
) -> list[ActionCandidate]:
    """Return the candidates whose constraints accept the request.

    Constraints are evaluated in stages of increasing ``order``. At each
    stage, candidates that have constraints of that order and pass them are
    preferred over candidates with no constraint of that order; the latter
    are only considered when the former yield no match.
    """
    start = time.perf_counter()
    selected = _evaluate(list(candidates), request, None, trace)

    if trace is not None:
        trace.selected = [candidate.action for candidate in selected]
        trace.total_duration_ms = (time.perf_counter() - start) * 1000

    if selected:
        logger.debug(
            "Selected %d of %d candidate(s)", len(selected), len(candidates)
        )
    else:
        logger.debug(
            "No candidate accepted the request %s", request.scope.get("path")
        )
    return selected


def _evaluate(
    candidates: list[ActionCandidate],
    request: Request,
    previous_order: int | None,
    trace: SelectionTrace | None,
) -> list[ActionCandidate]:
    order = _next_order(candidates, previous_order)
    if order is None:
        return candidates

    context = ActionConstraintContext(request=request, candidates=candidates)
    with_constraint: list[ActionCandidate] = []
    without_constraint: list[ActionCandidate] = []

    for candidate in candidates:
        context.current_candidate = candidate
        is_match = True
        has_constraint = False
        for constraint in candidate.constraints:
            if constraint.order != order:
                continue
            has_constraint = True
            if not _accept(constraint, context, trace):
                is_match = False
                logger.debug(
                    "%s rejected action %r",
                    type(constraint).__name__,
                    candidate.action,
                )
                break

        if is_match and has_constraint:
            with_constraint.append(candidate)
        elif is_match:
            without_constraint.append(candidate)

    if with_constraint:
        matches = _evaluate(with_constraint, request, order, trace)
        if matches:
            return matches
    if without_constraint:
        return _evaluate(without_constraint, request, order, trace)
    return []


def _next_order(
    candidates: Iterable[ActionCandidate], previous_order: int | None
) -> int | None:
    orders = [
        constraint.order
        for candidate in candidates
        for constraint in candidate.constraints
        if previous_order is None or constraint.order > previous_order
    ]
    return min(orders) if orders else None


def _accept(
    constraint: ActionConstraint,
    context: ActionConstraintContext,
    trace: SelectionTrace | None,
) -> bool:
    if trace is None:
        return constraint.accept(context)

    start = time.perf_counter()
    accepted = constraint.accept(context)
    trace.entries.append(
        TraceEntry(
            constraint_name=type(constraint).__name__,
            order=constraint.order,
            action=context.current_candidate.action
            if context.current_candidate is not None
            else None,
            duration_ms=(time.perf_counter() - start) * 1000,
            outcome="ACCEPTED" if accepted else "REJECTED",
        )
    )
    return accepted
