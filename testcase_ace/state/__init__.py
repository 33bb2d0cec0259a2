"""State package"""
from .store import (
    WorkspaceStatus,
    WorkspaceState,
    ApiRequest,
    ApiGenerationStarted,
    ApiCasesGenerated,
    UiGenerationStarted,
    UiScenariosGenerated,
    GenerationFailed,
    ExecutionStarted,
    ExecutionFinished,
    ExecutionFailed,
    SessionStore,
    reduce,
    project,
)

__all__ = [
    "WorkspaceStatus",
    "WorkspaceState",
    "ApiRequest",
    "ApiGenerationStarted",
    "ApiCasesGenerated",
    "UiGenerationStarted",
    "UiScenariosGenerated",
    "GenerationFailed",
    "ExecutionStarted",
    "ExecutionFinished",
    "ExecutionFailed",
    "SessionStore",
    "reduce",
    "project",
]
