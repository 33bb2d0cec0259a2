"""
Tests for the workspace reducer, its projection and the session store.
"""
import pytest
from pydantic import ValidationError

from testcase_ace.state.store import (
    Action,
    ApiCasesGenerated,
    ApiGenerationStarted,
    ApiRequest,
    ExecutionFailed,
    ExecutionFinished,
    ExecutionStarted,
    GenerationFailed,
    SessionStore,
    UiGenerationStarted,
    UiScenariosGenerated,
    WorkspaceState,
    WorkspaceStatus,
    project,
    reduce,
)

REQUEST = ApiRequest(api_endpoint="https://api.example.com/users", api_method="POST", payload="{}")


def _with_cases(bilingual):
    state = WorkspaceState(session_id="s1")
    state = reduce(state, ApiGenerationStarted(request=REQUEST))
    return reduce(state, ApiCasesGenerated(cases=bilingual))


def test_api_generation_lifecycle(bilingual):
    state = WorkspaceState(session_id="s1")
    started = reduce(state, ApiGenerationStarted(request=REQUEST))
    assert started.status is WorkspaceStatus.GENERATING
    assert started.activity == "Generating test cases..."
    assert started.api_request == REQUEST

    done = reduce(started, ApiCasesGenerated(cases=bilingual))
    assert done.status is WorkspaceStatus.READY
    assert done.activity is None
    assert done.api_cases == bilingual
    assert state.status is WorkspaceStatus.IDLE


def test_failed_generation_keeps_no_partial_result(bilingual, sample_report):
    """
    Starting a new generation drops the previous cases and report.
    """
    state = reduce(_with_cases(bilingual), ExecutionFinished(report=sample_report))
    state = reduce(state, ApiGenerationStarted(request=REQUEST))
    state = reduce(state, GenerationFailed(message="Failed to generate test cases. Please try again."))

    assert state.status is WorkspaceStatus.ERROR
    assert state.error == "Failed to generate test cases. Please try again."
    assert state.api_cases is None
    assert state.report is None


def test_ui_generation_leaves_api_results(bilingual):
    state = reduce(_with_cases(bilingual), UiGenerationStarted(description="A login form"))
    assert state.api_cases == bilingual
    assert state.ui_description == "A login form"
    state = reduce(state, UiScenariosGenerated(cases=bilingual))
    assert state.ui_scenarios == bilingual


def test_execution_lifecycle(bilingual, sample_report):
    state = reduce(_with_cases(bilingual), ExecutionStarted())
    assert state.status is WorkspaceStatus.EXECUTING
    assert reduce(state, ExecutionFinished(report=sample_report)).report == sample_report

    failed = reduce(state, ExecutionFailed(message="Failed to execute tests or generate report."))
    assert failed.status is WorkspaceStatus.ERROR
    assert failed.report is None
    assert failed.api_cases == bilingual


def test_new_action_clears_previous_error(bilingual):
    state = reduce(WorkspaceState(session_id="s1"), GenerationFailed(message="boom"))
    state = reduce(state, ApiGenerationStarted(request=REQUEST))
    assert state.error is None


def test_unknown_action_is_rejected():
    with pytest.raises(TypeError):
        reduce(WorkspaceState(session_id="s1"), Action())


def test_state_is_immutable():
    state = WorkspaceState(session_id="s1")
    with pytest.raises(ValidationError):
        state.status = WorkspaceStatus.READY


def test_project_empty_workspace():
    view = project(WorkspaceState(session_id="s1"))
    assert view["session_id"] == "s1"
    assert view["status"] == "idle"
    assert view["busy"] is False
    assert view["api_test_cases"] is None
    assert view["report"] is None
    assert view["downloads"] == []


def test_project_with_results(bilingual, sample_report):
    state = reduce(_with_cases(bilingual), ExecutionFinished(report=sample_report))
    view = project(state)

    cases = view["api_test_cases"]
    assert cases["english"][0]["Test Case ID"] == "TC-001"
    assert cases["english_text"].startswith("**Test Case ID:** TC-001\n")
    assert len(cases["japanese"]) == 1
    assert view["report"]["summary"]["totalTests"] == 2
    assert view["api_request"]["api_method"] == "POST"
    assert {"artifact": "api-test-cases-jp", "format": "csv"} in view["downloads"]
    assert {"artifact": "api-test-report", "format": "pdf"} in view["downloads"]
    assert {"artifact": "ui-test-scenarios", "format": "csv"} not in view["downloads"]


def test_project_marks_busy_while_generating():
    state = reduce(WorkspaceState(session_id="s1"), ApiGenerationStarted(request=REQUEST))
    view = project(state)
    assert view["busy"] is True
    assert view["activity"] == "Generating test cases..."


def test_session_store():
    store = SessionStore()
    state = store.create()
    assert state.session_id in store
    assert len(store) == 1
    assert store.get(state.session_id) == state
    assert store.get("missing") is None

    updated = store.dispatch(state.session_id, GenerationFailed(message="boom"))
    assert store.get(state.session_id) is updated

    with pytest.raises(KeyError):
        store.dispatch("missing", ExecutionStarted())


def test_session_store_drops_least_recently_used():
    """
    Past the cap, creating a workspace drops the one untouched the longest.
    """
    store = SessionStore(max_sessions=2)
    first = store.create()
    second = store.create()
    store.dispatch(first.session_id, GenerationFailed(message="boom"))

    third = store.create()

    assert len(store) == 2
    assert second.session_id not in store
    assert first.session_id in store
    assert third.session_id in store
