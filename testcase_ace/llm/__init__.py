"""LLM package"""
from .invoker import ModelInvoker, ValidationOutcome, validate_output
from .retry import Action, Attempt, Outcome, next_action

__all__ = [
    "ModelInvoker",
    "ValidationOutcome",
    "validate_output",
    "Action",
    "Attempt",
    "Outcome",
    "next_action",
]
