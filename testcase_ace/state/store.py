"""
Workspace state for the form app.

State is immutable: every change is an action passed through ``reduce``,
and what the browser renders is ``project(state)``.
"""
import logging
import uuid
from collections import OrderedDict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from ..export.downloads import available_downloads
from ..models.report import TestReport
from ..models.test_case import BilingualCases
from ..utils.case_text import serialize_test_cases

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class WorkspaceStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    EXECUTING = "executing"
    READY = "ready"
    ERROR = "error"


class ApiRequest(BaseModel):
    """Form values of the API test page."""

    model_config = ConfigDict(frozen=True)

    api_endpoint: str
    api_method: str
    payload: str


class WorkspaceState(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: str
    status: WorkspaceStatus = WorkspaceStatus.IDLE
    activity: Optional[str] = None
    error: Optional[str] = None
    api_request: Optional[ApiRequest] = None
    api_cases: Optional[BilingualCases] = None
    ui_description: Optional[str] = None
    ui_scenarios: Optional[BilingualCases] = None
    report: Optional[TestReport] = None
    updated_at: datetime = Field(default_factory=_now)


# Actions

class Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class ApiGenerationStarted(Action):
    request: ApiRequest


class ApiCasesGenerated(Action):
    cases: BilingualCases


class UiGenerationStarted(Action):
    description: str


class UiScenariosGenerated(Action):
    cases: BilingualCases


class GenerationFailed(Action):
    message: str


class ExecutionStarted(Action):
    pass


class ExecutionFinished(Action):
    report: TestReport


class ExecutionFailed(Action):
    message: str


def reduce(state: WorkspaceState, action: Action) -> WorkspaceState:
    """
    Apply one action.

    A new generation discards the previous result of that kind before the
    model is called, so a failed run leaves no partial result behind.

    Raises:
        TypeError: For an unknown action type
    """
    if isinstance(action, ApiGenerationStarted):
        changes = {
            "status": WorkspaceStatus.GENERATING,
            "activity": "Generating test cases...",
            "error": None,
            "api_request": action.request,
            "api_cases": None,
            "report": None,
        }
    elif isinstance(action, ApiCasesGenerated):
        changes = {"status": WorkspaceStatus.READY, "activity": None, "api_cases": action.cases}
    elif isinstance(action, UiGenerationStarted):
        changes = {
            "status": WorkspaceStatus.GENERATING,
            "activity": "Generating test scenarios...",
            "error": None,
            "ui_description": action.description,
            "ui_scenarios": None,
        }
    elif isinstance(action, UiScenariosGenerated):
        changes = {"status": WorkspaceStatus.READY, "activity": None, "ui_scenarios": action.cases}
    elif isinstance(action, GenerationFailed):
        changes = {"status": WorkspaceStatus.ERROR, "activity": None, "error": action.message}
    elif isinstance(action, ExecutionStarted):
        changes = {
            "status": WorkspaceStatus.EXECUTING,
            "activity": "Running tests and generating report...",
            "error": None,
            "report": None,
        }
    elif isinstance(action, ExecutionFinished):
        changes = {"status": WorkspaceStatus.READY, "activity": None, "report": action.report}
    elif isinstance(action, ExecutionFailed):
        changes = {"status": WorkspaceStatus.ERROR, "activity": None, "error": action.message}
    else:
        raise TypeError(f"Unknown action: {type(action).__name__}")

    changes["updated_at"] = _now()
    return state.model_copy(update=changes)


def _project_cases(cases: Optional[BilingualCases]) -> Optional[Dict[str, Any]]:
    if cases is None:
        return None
    return {
        "english": [case.to_row() for case in cases.english],
        "japanese": [case.to_row() for case in cases.japanese],
        "english_text": serialize_test_cases(cases.english),
        "japanese_text": serialize_test_cases(cases.japanese),
    }


def project(state: WorkspaceState) -> Dict[str, Any]:
    """Render the workspace as the JSON the frontend displays."""
    return {
        "session_id": state.session_id,
        "status": state.status.value,
        "busy": state.status in (WorkspaceStatus.GENERATING, WorkspaceStatus.EXECUTING),
        "activity": state.activity,
        "error": state.error,
        "api_request": state.api_request.model_dump() if state.api_request else None,
        "api_test_cases": _project_cases(state.api_cases),
        "ui_description": state.ui_description,
        "ui_scenarios": _project_cases(state.ui_scenarios),
        "report": state.report.model_dump(mode="json", by_alias=True) if state.report else None,
        "downloads": available_downloads(state),
        "updated_at": state.updated_at.isoformat(),
    }


class SessionStore:
    """
    In-memory workspaces keyed by session id, least recently used first.
    Nothing outlives the process. Past ``max_sessions`` the oldest
    workspace is dropped.
    """

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions or settings.MAX_SESSIONS
        self._sessions: "OrderedDict[str, WorkspaceState]" = OrderedDict()

    def create(self) -> WorkspaceState:
        state = WorkspaceState(session_id=str(uuid.uuid4())[:8])
        self._sessions[state.session_id] = state
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted session {evicted}")
        return state

    def get(self, session_id: str) -> Optional[WorkspaceState]:
        return self._sessions.get(session_id)

    def dispatch(self, session_id: str, action: Action) -> WorkspaceState:
        """
        Reduce an action into a session's state.

        Raises:
            KeyError: If the session does not exist
        """
        state = reduce(self._sessions[session_id], action)
        self._sessions[session_id] = state
        self._sessions.move_to_end(session_id)
        return state

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
