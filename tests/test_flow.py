from __future__ import annotations

import pytest

from scorecard.flow import FlowState, Step, StepNotAllowed, advance, available_steps, can_enter


def test_fresh_state_only_reaches_course_history_settings() -> None:
    assert available_steps(FlowState()) == [Step.COURSE, Step.HISTORY, Step.SETTINGS]


def test_scores_need_two_players() -> None:
    state = FlowState(has_session=True, players=1)
    assert can_enter(Step.PLAYERS, state)
    assert not can_enter(Step.SCORES, state)
    assert can_enter(Step.SCORES, FlowState(has_session=True, players=2))


def test_results_steps_need_a_result() -> None:
    state = FlowState(has_session=True, players=2)
    for step in (Step.RESULTS, Step.COMPARISON, Step.EVOLUTION):
        assert not can_enter(step, state)
        assert can_enter(step, FlowState(has_session=True, players=2, results=1))


def test_advance_returns_new_state() -> None:
    state = FlowState(has_session=True, players=3)
    moved = advance(state, "scores")

    assert moved.step == Step.SCORES
    assert state.step == Step.COURSE
    assert moved.players == 3


def test_advance_refuses_guarded_step() -> None:
    with pytest.raises(StepNotAllowed, match="comparison"):
        advance(FlowState(has_session=True, players=2), Step.COMPARISON)
