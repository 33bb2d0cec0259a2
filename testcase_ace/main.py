"""
FastAPI Main Application - Test Case Ace
"""
import base64
import binascii
import logging
import re
from datetime import datetime
from urllib.parse import quote, urlparse

from fastapi import FastAPI, HTTPException, Query
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, field_validator

from .config import settings
from .agents.planner_agent import PlannerAgent
from .agents.scenario_agent import ScenarioAgent
from .agents.orchestrator_agent import OrchestratorAgent
from .export.downloads import ARTIFACT_FORMATS, Download, build_download, cases_download
from .state.store import (
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
    project,
)
from .utils.case_text import parse_test_cases
from .utils.exceptions import ExportError, GenerationError

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")
IMAGE_DATA_URI_RE = re.compile(r"^data:image/(png|jpeg|webp);base64,(.+)$", re.DOTALL)

API_GENERATION_FAILED = "Failed to generate test cases. Please try again."
UI_GENERATION_FAILED = "Failed to generate test scenarios. Please try again."
EXECUTION_FAILED = "Failed to execute tests or generate report."


app = FastAPI(
    title=settings.APP_NAME,
    description="Generate, run and export API and UI test cases with an LLM",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static files for frontend
frontend_path = settings.FRONTEND_DIR
if frontend_path.exists():
    app.mount("/static", StaticFiles(directory=str(frontend_path)), name="static")

# Workspace storage (in-memory, one per browser session)
sessions = SessionStore()


# Request Models
class ApiTestCaseRequest(BaseModel):
    api_endpoint: str
    api_method: str = "POST"
    payload: str

    @field_validator("api_endpoint")
    @classmethod
    def _valid_url(cls, value: str) -> str:
        parsed = urlparse(value.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Please enter a valid URL.")
        return value.strip()

    @field_validator("api_method")
    @classmethod
    def _known_method(cls, value: str) -> str:
        method = value.strip().upper()
        if method not in API_METHODS:
            raise ValueError("Please select an API method.")
        return method

    @field_validator("payload")
    @classmethod
    def _payload_length(cls, value: str) -> str:
        if len(value) < 2:
            raise ValueError("Payload must be at least 2 characters (e.g., {}).")
        return value


class UiScenarioRequest(BaseModel):
    photo_data_uri: str
    description: str

    @field_validator("photo_data_uri")
    @classmethod
    def _valid_image(cls, value: str) -> str:
        if not value:
            raise ValueError("Please upload an image.")
        match = IMAGE_DATA_URI_RE.match(value)
        if not match:
            raise ValueError("Please upload a PNG, JPEG or WebP image.")
        try:
            size = len(base64.b64decode(match.group(2), validate=True))
        except (binascii.Error, ValueError):
            raise ValueError("The uploaded image could not be read.")
        if size > settings.MAX_IMAGE_BYTES:
            raise ValueError("Please upload an image smaller than 4MB.")
        return value

    @field_validator("description")
    @classmethod
    def _description_length(cls, value: str) -> str:
        if len(value.strip()) < 10:
            raise ValueError("Description must be at least 10 characters.")
        return value


class TextExportRequest(BaseModel):
    text: str
    basename: str = "test-cases"


def _get_session(session_id: str) -> WorkspaceState:
    state = sessions.get(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def _content_disposition(filename: str) -> str:
    """Attachment header with an ASCII name and the full UTF-8 name."""
    fallback = filename.encode("ascii", "ignore").decode("ascii").lstrip("-_") or "download"
    if fallback.startswith("."):
        fallback = "download" + fallback
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _download_response(download: Download) -> Response:
    return Response(
        content=download.content,
        media_type=download.media_type,
        headers={"Content-Disposition": _content_disposition(download.filename)}
    )


# API Endpoints
@app.get("/")
async def root():
    """Serve the frontend"""
    index_path = frontend_path / "index.html"
    if index_path.exists():
        return FileResponse(str(index_path))
    return {"message": "Test Case Ace API", "docs": "/docs"}


@app.post("/api/sessions")
async def create_session():
    """Create an empty workspace."""
    state = sessions.create()
    logger.info(f"Created session {state.session_id}")
    return project(state)


@app.get("/api/sessions/{session_id}")
async def get_session(session_id: str):
    """Get the current workspace."""
    return project(_get_session(session_id))


@app.post("/api/sessions/{session_id}/api-test-cases")
async def generate_api_test_cases(session_id: str, request: ApiTestCaseRequest):
    """
    Generate English and Japanese API test cases.
    """
    _get_session(session_id)
    api_request = ApiRequest(**request.model_dump())
    sessions.dispatch(session_id, ApiGenerationStarted(request=api_request))

    try:
        planner = PlannerAgent()
        cases = await planner.generate_tests(
            api_endpoint=request.api_endpoint,
            api_method=request.api_method,
            payload=request.payload
        )
    except GenerationError as e:
        logger.error(f"API test case generation failed for session {session_id}: {e}")
        sessions.dispatch(session_id, GenerationFailed(message=API_GENERATION_FAILED))
        raise HTTPException(status_code=502, detail=API_GENERATION_FAILED)
    except Exception as e:
        logger.exception(f"Unexpected error generating test cases for session {session_id}")
        sessions.dispatch(session_id, GenerationFailed(message=str(e)))
        raise HTTPException(status_code=500, detail=str(e))

    return project(sessions.dispatch(session_id, ApiCasesGenerated(cases=cases)))


@app.post("/api/sessions/{session_id}/ui-scenarios")
async def generate_ui_scenarios(session_id: str, request: UiScenarioRequest):
    """
    Generate UI test scenarios from a screenshot and description.
    """
    _get_session(session_id)
    sessions.dispatch(session_id, UiGenerationStarted(description=request.description))

    try:
        writer = ScenarioAgent()
        scenarios = await writer.generate_scenarios(
            photo_data_uri=request.photo_data_uri,
            description=request.description
        )
    except GenerationError as e:
        logger.error(f"UI scenario generation failed for session {session_id}: {e}")
        sessions.dispatch(session_id, GenerationFailed(message=UI_GENERATION_FAILED))
        raise HTTPException(status_code=502, detail=UI_GENERATION_FAILED)
    except Exception as e:
        logger.exception(f"Unexpected error generating scenarios for session {session_id}")
        sessions.dispatch(session_id, GenerationFailed(message=str(e)))
        raise HTTPException(status_code=500, detail=str(e))

    return project(sessions.dispatch(session_id, UiScenariosGenerated(cases=scenarios)))


@app.post("/api/sessions/{session_id}/execute-tests")
async def execute_tests(session_id: str):
    """
    Run the generated English API test cases against the stored endpoint.
    """
    state = _get_session(session_id)

    if state.api_cases is None or not state.api_cases.english or state.api_request is None:
        raise HTTPException(
            status_code=400,
            detail="No test cases to run. Please generate test cases first."
        )

    sessions.dispatch(session_id, ExecutionStarted())

    try:
        orchestrator = OrchestratorAgent()
        report = await orchestrator.execute_tests(
            api_endpoint=state.api_request.api_endpoint,
            api_method=state.api_request.api_method,
            test_cases=state.api_cases.english
        )
    except Exception as e:
        logger.exception(f"Test execution failed for session {session_id}")
        sessions.dispatch(session_id, ExecutionFailed(message=EXECUTION_FAILED))
        raise HTTPException(status_code=500, detail=f"{EXECUTION_FAILED} {e}")

    return project(sessions.dispatch(session_id, ExecutionFinished(report=report)))


@app.get("/api/sessions/{session_id}/export/{artifact}")
async def export_artifact(session_id: str, artifact: str, format: str = Query("xlsx")):
    """
    Download an artifact of the workspace.
    """
    state = _get_session(session_id)

    formats = ARTIFACT_FORMATS.get(artifact)
    if formats is None:
        raise HTTPException(status_code=404, detail=f"Unknown artifact: {artifact}")
    if format not in formats:
        raise HTTPException(
            status_code=400,
            detail=f"{artifact} can be exported as: {', '.join(formats)}"
        )

    try:
        download = await build_download(state, artifact, format)
    except ExportError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _download_response(download)


@app.post("/api/export/test-cases")
async def export_test_case_text(request: TextExportRequest, format: str = Query("xlsx")):
    """
    Parse pasted test-case text and download it as a spreadsheet.
    """
    cases = parse_test_cases(request.text)
    try:
        download = cases_download(cases, request.basename, format)
    except ExportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _download_response(download)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
