"""
Primary/fallback policy for model calls.

A generation action gets one primary attempt and at most one alternate
attempt with a simplified prompt. The table below is the whole policy.
"""
from enum import Enum


class Attempt(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


class Outcome(str, Enum):
    OK = "ok"
    FAILED = "failed"


class Action(str, Enum):
    RETURN = "return"
    TRY_FALLBACK = "try_fallback"
    GIVE_UP = "give_up"


DECISION_TABLE = {
    (Attempt.PRIMARY, Outcome.OK): Action.RETURN,
    (Attempt.PRIMARY, Outcome.FAILED): Action.TRY_FALLBACK,
    (Attempt.FALLBACK, Outcome.OK): Action.RETURN,
    (Attempt.FALLBACK, Outcome.FAILED): Action.GIVE_UP,
}


def next_action(attempt: Attempt, outcome: Outcome, has_fallback: bool = True) -> Action:
    """Look up what to do after an attempt; without a fallback prompt a failure gives up."""
    action = DECISION_TABLE[(attempt, outcome)]
    if action is Action.TRY_FALLBACK and not has_fallback:
        return Action.GIVE_UP
    return action
