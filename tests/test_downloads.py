"""
Tests for building workspace downloads.
"""
import asyncio
import io
from datetime import datetime
from unittest.mock import AsyncMock, patch

import pandas as pd
import pytest

from testcase_ace.export.downloads import ARTIFACT_FORMATS, build_download, cases_download
from testcase_ace.state.store import WorkspaceState
from testcase_ace.utils.exceptions import ExportError

NOW = datetime(2026, 10, 19, 14, 25, 1)


def test_artifact_formats():
    assert ARTIFACT_FORMATS["api-test-cases-en"] == ("xlsx", "csv")
    assert ARTIFACT_FORMATS["ui-test-scenarios"] == ("csv",)
    assert ARTIFACT_FORMATS["api-test-report"] == ("xlsx", "pdf")


def test_cases_download_file_name(sample_cases):
    download = cases_download(sample_cases, "api-test-cases-en", "csv", NOW)
    assert download.filename == "api-test-cases-en-20261019-142501.csv"
    assert download.media_type.startswith("text/csv")


def test_cases_download_rejects_unknown_format(sample_cases):
    with pytest.raises(ExportError):
        cases_download(sample_cases, "test-cases", "pdf", NOW)


def test_japanese_cases_download(bilingual):
    state = WorkspaceState(session_id="s1", api_cases=bilingual)
    download = asyncio.run(build_download(state, "api-test-cases-jp", "xlsx", NOW))
    assert download.filename == "api-test-cases-jp-20261019-142501.xlsx"
    frame = pd.read_excel(io.BytesIO(download.content), sheet_name="Test Cases")
    assert frame["Preconditions"].tolist() == ["ユーザーは認証済みです。"]


def test_bilingual_scenarios_download(bilingual):
    state = WorkspaceState(session_id="s1", ui_scenarios=bilingual)
    download = asyncio.run(build_download(state, "ui-test-scenarios", "csv", NOW))
    assert download.filename == "ui-test-scenarios-20261019-142501.csv"
    frame = pd.read_csv(io.BytesIO(download.content), encoding="utf-8-sig", keep_default_na=False)
    assert frame.iloc[0].tolist() == ["**Test Case ID:** TC-001", "**Test Case ID:** TC-001"]


def test_report_pdf_download(sample_report):
    state = WorkspaceState(session_id="s1", report=sample_report)
    with patch("testcase_ace.export.downloads.render_report_pdf", AsyncMock(return_value=b"%PDF")) as render:
        download = asyncio.run(build_download(state, "api-test-report", "pdf", NOW))
    render.assert_awaited_once_with(sample_report)
    assert download.content == b"%PDF"
    assert download.media_type == "application/pdf"
    assert download.filename == "api-test-report-20261019-142501.pdf"


def test_download_without_data_fails():
    """
    Nothing can be exported before the matching generation has run.
    """
    state = WorkspaceState(session_id="s1")
    with pytest.raises(ExportError, match="Nothing to export"):
        asyncio.run(build_download(state, "api-test-report", "xlsx", NOW))


def test_download_with_wrong_format_fails(bilingual):
    state = WorkspaceState(session_id="s1", ui_scenarios=bilingual)
    with pytest.raises(ExportError):
        asyncio.run(build_download(state, "ui-test-scenarios", "xlsx", NOW))
    with pytest.raises(ExportError):
        asyncio.run(build_download(state, "no-such-artifact", "csv", NOW))
