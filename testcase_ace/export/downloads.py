"""
Downloadable artifacts of a workspace.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from ..models.test_case import TestCase
from ..utils.case_text import serialize_test_cases
from ..utils.exceptions import ExportError
from ..utils.helpers import file_timestamp, sanitize_filename
from .pdf import PDF_MEDIA_TYPE, render_report_pdf
from .spreadsheet import (
    CSV_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
    bilingual_to_csv,
    cases_to_csv,
    cases_to_xlsx,
    report_to_xlsx,
)

if TYPE_CHECKING:
    from ..state.store import WorkspaceState

REPORT_ARTIFACT = "api-test-report"
BILINGUAL_ARTIFACT = "ui-test-scenarios"

# artifact -> (workspace attribute, language)
CASE_ARTIFACTS: Dict[str, Tuple[str, str]] = {
    "api-test-cases-en": ("api_cases", "english"),
    "api-test-cases-jp": ("api_cases", "japanese"),
    "ui-test-scenarios-en": ("ui_scenarios", "english"),
    "ui-test-scenarios-jp": ("ui_scenarios", "japanese"),
}

ARTIFACT_FORMATS: Dict[str, Tuple[str, ...]] = {
    **{name: ("xlsx", "csv") for name in CASE_ARTIFACTS},
    BILINGUAL_ARTIFACT: ("csv",),
    REPORT_ARTIFACT: ("xlsx", "pdf"),
}


@dataclass(frozen=True)
class Download:
    filename: str
    media_type: str
    content: bytes


def _filename(basename: str, fmt: str, now: Optional[datetime]) -> str:
    return f"{sanitize_filename(basename)}-{file_timestamp(now)}.{fmt}"


def cases_download(
    cases: Sequence[TestCase],
    basename: str,
    fmt: str,
    now: Optional[datetime] = None
) -> Download:
    """Export test cases as xlsx or csv."""
    if fmt == "xlsx":
        return Download(_filename(basename, fmt, now), XLSX_MEDIA_TYPE, cases_to_xlsx(cases))
    if fmt == "csv":
        return Download(_filename(basename, fmt, now), CSV_MEDIA_TYPE, cases_to_csv(cases))
    raise ExportError(f"Unsupported format for test cases: {fmt}")


def _has_data(state: "WorkspaceState", artifact: str) -> bool:
    if artifact == REPORT_ARTIFACT:
        return state.report is not None
    if artifact == BILINGUAL_ARTIFACT:
        return state.ui_scenarios is not None
    attribute, _ = CASE_ARTIFACTS[artifact]
    return getattr(state, attribute) is not None


def available_downloads(state: "WorkspaceState") -> List[Dict[str, str]]:
    """Artifacts the workspace can currently export, one entry per format."""
    return [
        {"artifact": artifact, "format": fmt}
        for artifact, formats in ARTIFACT_FORMATS.items()
        if _has_data(state, artifact)
        for fmt in formats
    ]


async def build_download(
    state: "WorkspaceState",
    artifact: str,
    fmt: str,
    now: Optional[datetime] = None
) -> Download:
    """
    Build one artifact of a workspace.

    Args:
        state: Workspace to export from
        artifact: Artifact name, see ARTIFACT_FORMATS
        fmt: File format
        now: Timestamp for the file name

    Raises:
        ExportError: If the artifact or format is unknown, or the workspace
            has nothing to export for it yet
    """
    if fmt not in ARTIFACT_FORMATS.get(artifact, ()):
        raise ExportError(f"Cannot export {artifact} as {fmt}")
    if not _has_data(state, artifact):
        raise ExportError(f"Nothing to export for {artifact}")

    if artifact == REPORT_ARTIFACT:
        if fmt == "pdf":
            content = await render_report_pdf(state.report)
            return Download(_filename(artifact, fmt, now), PDF_MEDIA_TYPE, content)
        return Download(_filename(artifact, fmt, now), XLSX_MEDIA_TYPE, report_to_xlsx(state.report))

    if artifact == BILINGUAL_ARTIFACT:
        content = bilingual_to_csv(
            serialize_test_cases(state.ui_scenarios.english),
            serialize_test_cases(state.ui_scenarios.japanese),
        )
        return Download(_filename(artifact, fmt, now), CSV_MEDIA_TYPE, content)

    attribute, language = CASE_ARTIFACTS[artifact]
    cases = getattr(getattr(state, attribute), language)
    return cases_download(cases, artifact, fmt, now)
