"""Tests for realize_constraints() and select_candidates()."""

from __future__ import annotations

from typing import Any

import pytest
from starlette.requests import Request

from fastapi_mvc_extensions.constraint import ActionConstraint, ActionConstraintFactory
from fastapi_mvc_extensions.constraints.request_scoped import (
    RequestScopedActionConstraint,
)
from fastapi_mvc_extensions.context import ActionCandidate, ActionConstraintContext
from fastapi_mvc_extensions.exceptions import ArgumentError
from fastapi_mvc_extensions.selection import realize_constraints, select_candidates
from fastapi_mvc_extensions.services import ServiceProvider
from fastapi_mvc_extensions.trace import SelectionTrace


class _Fixed(ActionConstraint):
    def __init__(self, result: bool, order: int = 0) -> None:
        self._result = result
        self._order = order
        self.seen: list[ActionConstraintContext] = []

    @property
    def order(self) -> int:
        return self._order

    def accept(self, context: ActionConstraintContext) -> bool:
        self.seen.append(context)
        return self._result


class _FixedFactory(ActionConstraintFactory):
    def __init__(self, result: bool) -> None:
        self._result = result

    def create_instance(self, services: ServiceProvider) -> ActionConstraint:
        return _Fixed(self._result)


class TestRealizeConstraints:
    def test_factories_are_realized(self, request_scope: Any) -> None:
        constraints = realize_constraints([_FixedFactory(True)], request_scope())
        assert len(constraints) == 1
        assert isinstance(constraints[0], _Fixed)

    def test_plain_constraints_pass_through(self, request_scope: Any) -> None:
        constraint = _Fixed(True)
        assert realize_constraints([constraint], request_scope()) == [constraint]

    def test_preserves_declaration_order(self, request_scope: Any) -> None:
        first, second = _Fixed(True), _Fixed(False)
        assert realize_constraints([first, second], request_scope()) == [first, second]

    def test_unknown_metadata_raises(self, request_scope: Any) -> None:
        with pytest.raises(ArgumentError):
            realize_constraints(["not a constraint"], request_scope())  # type: ignore[list-item]

    def test_request_scoped_constraint(self, request_scope: Any) -> None:
        scope = request_scope("abc")
        constraints = realize_constraints([RequestScopedActionConstraint("abc")], scope)
        assert isinstance(constraints[0], ActionConstraint)


class TestSelectCandidates:
    def test_no_constraints_returns_all(self, make_request: Any) -> None:
        candidates = [ActionCandidate("a"), ActionCandidate("b")]
        assert select_candidates(candidates, make_request()) == candidates

    def test_empty_candidates(self, make_request: Any) -> None:
        assert select_candidates([], make_request()) == []

    def test_rejecting_constraint_removes_candidate(self, make_request: Any) -> None:
        accepted = ActionCandidate("a", [_Fixed(True)])
        rejected = ActionCandidate("b", [_Fixed(False)])
        assert select_candidates([accepted, rejected], make_request()) == [accepted]

    def test_all_rejected_returns_empty(self, make_request: Any) -> None:
        candidates = [ActionCandidate("a", [_Fixed(False)])]
        assert select_candidates(candidates, make_request()) == []

    def test_constrained_match_preferred_over_unconstrained(
        self, make_request: Any
    ) -> None:
        constrained = ActionCandidate("constrained", [_Fixed(True)])
        plain = ActionCandidate("plain")
        assert select_candidates([plain, constrained], make_request()) == [constrained]

    def test_unconstrained_used_when_constrained_rejected(
        self, make_request: Any
    ) -> None:
        constrained = ActionCandidate("constrained", [_Fixed(False)])
        plain = ActionCandidate("plain")
        assert select_candidates([constrained, plain], make_request()) == [plain]

    def test_all_constraints_must_accept(self, make_request: Any) -> None:
        candidate = ActionCandidate("a", [_Fixed(True), _Fixed(False)])
        assert select_candidates([candidate], make_request()) == []

    def test_lower_order_evaluated_first(self, make_request: Any) -> None:
        late = _Fixed(True, order=10)
        early = _Fixed(False, order=-1)
        candidate = ActionCandidate("a", [late, early])
        assert select_candidates([candidate], make_request()) == []
        assert early.seen
        assert not late.seen

    def test_later_stage_filters_survivors(self, make_request: Any) -> None:
        a = ActionCandidate("a", [_Fixed(True, order=0), _Fixed(False, order=1)])
        b = ActionCandidate("b", [_Fixed(True, order=0), _Fixed(True, order=1)])
        assert select_candidates([a, b], make_request()) == [b]

    def test_falls_back_when_later_stage_rejects_constrained(
        self, make_request: Any
    ) -> None:
        constrained = ActionCandidate(
            "constrained", [_Fixed(True, order=0), _Fixed(False, order=1)]
        )
        plain = ActionCandidate("plain")
        assert select_candidates([constrained, plain], make_request()) == [plain]

    def test_context_carries_current_candidate(self, make_request: Any) -> None:
        constraint = _Fixed(True)
        candidate = ActionCandidate("a", [constraint])
        request = make_request()
        select_candidates([candidate], request)
        ctx = constraint.seen[0]
        assert ctx.request is request
        assert ctx.current_candidate is candidate
        assert list(ctx.candidates) == [candidate]

    def test_records_trace(self, make_request: Any) -> None:
        trace = SelectionTrace()
        accepted = ActionCandidate("a", [_Fixed(True)])
        rejected = ActionCandidate("b", [_Fixed(False)])
        select_candidates([accepted, rejected], make_request(), trace=trace)

        assert [entry.outcome for entry in trace.entries] == ["ACCEPTED", "REJECTED"]
        assert [entry.action for entry in trace.entries] == ["a", "b"]
        assert trace.entries[0].constraint_name == "_Fixed"
        assert trace.entries[0].order == 0
        assert trace.selected == ["a"]
        assert trace.total_duration_ms >= 0

    def test_request_scoped_candidates(self, request_scope: Any) -> None:
        scope = request_scope("abc")
        request = scope.get_service(Request)
        abc = ActionCandidate(
            "abc", realize_constraints([RequestScopedActionConstraint("abc")], scope)
        )
        xyz = ActionCandidate(
            "xyz", realize_constraints([RequestScopedActionConstraint("xyz")], scope)
        )
        assert select_candidates([xyz, abc], request) == [abc]
