"""
Spreadsheet exports - test cases and test reports as .xlsx / .csv
"""
import io
import itertools
from typing import Dict, List, Sequence

import pandas as pd
from openpyxl.styles import Alignment
from openpyxl.utils import get_column_letter

from ..models.report import TestReport
from ..models.test_case import TestCase

TEST_CASES_SHEET = "Test Cases"
SUMMARY_SHEET = "Summary"
RESULTS_SHEET = "Detailed Results"

TEST_CASE_COLUMNS = ["Test Case ID", "Preconditions", "Steps to Reproduce", "Expected Results"]
TEST_CASE_WIDTHS = [15, 40, 60, 60]

RESULT_COLUMNS = [
    "Test Case ID",
    "Status",
    "Reasoning",
    "Preconditions",
    "Steps to Reproduce",
    "Expected Results",
    "Actual Response",
]
RESULT_WIDTHS = [15, 10, 50, 40, 60, 60, 80]

SUMMARY_WIDTHS = [15, 50]

BILINGUAL_COLUMNS = ["English Scenarios", "Japanese Scenarios"]

CSV_ENCODING = "utf-8-sig"  # BOM so spreadsheet apps detect UTF-8

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _format_sheet(worksheet, widths: Sequence[int], wrap: bool = True):
    """
    Apply column widths and top-aligned wrapping to every written cell.

    Text starting with ``=`` is kept as a string, never stored as a formula.
    """
    for index, width in enumerate(widths, start=1):
        worksheet.column_dimensions[get_column_letter(index)].width = width
    for row in worksheet.iter_rows():
        for cell in row:
            if cell.data_type == "f":
                cell.data_type = "s"
            if wrap:
                cell.alignment = Alignment(wrap_text=True, vertical="top")


def cases_frame(cases: Sequence[TestCase]) -> pd.DataFrame:
    """One row per test case, always carrying the four headers."""
    return pd.DataFrame([case.to_row() for case in cases], columns=TEST_CASE_COLUMNS)


def report_results_frame(report: TestReport) -> pd.DataFrame:
    rows = [
        {
            "Test Case ID": r.test_case.test_case_id,
            "Status": r.status.value,
            "Reasoning": r.reasoning,
            "Preconditions": r.test_case.preconditions,
            "Steps to Reproduce": r.test_case.steps_to_reproduce,
            "Expected Results": r.test_case.expected_results,
            "Actual Response": r.actual_response,
        }
        for r in report.results
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def report_summary_rows(report: TestReport) -> List[List]:
    return [
        ["API Endpoint", report.api_endpoint],
        ["API Method", report.api_method],
        ["Generated At", report.generated_at.strftime("%Y-%m-%d %H:%M:%S")],
        [None, None],
        ["Total Tests", report.summary.total_tests],
        ["Passed", report.summary.passed],
        ["Failed", report.summary.failed],
        ["Errors", report.summary.errors],
    ]


def cases_to_xlsx(cases: Sequence[TestCase]) -> bytes:
    """
    Build a "Test Cases" workbook.

    An empty sequence still yields the header row so the download reads as
    an intentionally empty result.
    """
    bio = io.BytesIO()
    with pd.ExcelWriter(bio, engine="openpyxl") as writer:
        cases_frame(cases).to_excel(writer, index=False, sheet_name=TEST_CASES_SHEET)
        _format_sheet(writer.sheets[TEST_CASES_SHEET], TEST_CASE_WIDTHS)
    return bio.getvalue()


def cases_to_csv(cases: Sequence[TestCase]) -> bytes:
    """Four-column CSV with a UTF-8 byte order mark."""
    return cases_frame(cases).to_csv(index=False).encode(CSV_ENCODING)


def report_to_xlsx(report: TestReport) -> bytes:
    """Build a report workbook with "Summary" and "Detailed Results" sheets."""
    bio = io.BytesIO()
    with pd.ExcelWriter(bio, engine="openpyxl") as writer:
        pd.DataFrame(report_summary_rows(report)).to_excel(
            writer, index=False, header=False, sheet_name=SUMMARY_SHEET
        )
        _format_sheet(writer.sheets[SUMMARY_SHEET], SUMMARY_WIDTHS, wrap=False)

        report_results_frame(report).to_excel(writer, index=False, sheet_name=RESULTS_SHEET)
        _format_sheet(writer.sheets[RESULTS_SHEET], RESULT_WIDTHS)
    return bio.getvalue()


def bilingual_to_csv(english_text: str, japanese_text: str) -> bytes:
    """
    Side-by-side CSV of two texts, one non-blank line per row.

    The shorter text is padded with empty cells.
    """
    english_lines = [line for line in english_text.split("\n") if line.strip()]
    japanese_lines = [line for line in japanese_text.split("\n") if line.strip()]
    rows: List[Dict[str, str]] = [
        {BILINGUAL_COLUMNS[0]: en, BILINGUAL_COLUMNS[1]: jp}
        for en, jp in itertools.zip_longest(english_lines, japanese_lines, fillvalue="")
    ]
    frame = pd.DataFrame(rows, columns=BILINGUAL_COLUMNS)
    return frame.to_csv(index=False).encode(CSV_ENCODING)
