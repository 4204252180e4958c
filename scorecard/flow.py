from dataclasses import dataclass, replace
from enum import Enum

from .validation import ScorecardError


class Step(str, Enum):
    COURSE = "course"
    PLAYERS = "players"
    SCORES = "scores"
    RESULTS = "results"
    COMPARISON = "comparison"
    EVOLUTION = "evolution"
    HISTORY = "history"
    SETTINGS = "settings"


class StepNotAllowed(ScorecardError):
    pass


@dataclass(frozen=True)
class FlowState:
    step: Step = Step.COURSE
    has_session: bool = False
    players: int = 0
    results: int = 0


def can_enter(step: Step, state: FlowState) -> bool:
    if step in (Step.COURSE, Step.HISTORY, Step.SETTINGS):
        return True
    if step == Step.PLAYERS:
        return state.has_session
    if step == Step.SCORES:
        return state.has_session and state.players >= 2
    # results, comparison, evolution
    return state.results > 0


def available_steps(state: FlowState):
    return [step for step in Step if can_enter(step, state)]


def advance(state: FlowState, step) -> FlowState:
    step = Step(step)
    if not can_enter(step, state):
        raise StepNotAllowed(f"cannot go to {step.value!r} from {state.step.value!r}")
    return replace(state, step=step)


def state_for_session(session, results) -> FlowState:
    """Where a stored session stands: it exists, with its players and any results."""
    return FlowState(
        step=Step.RESULTS if results else Step.SCORES,
        has_session=True,
        players=len(session.session_players),
        results=len(results),
    )
