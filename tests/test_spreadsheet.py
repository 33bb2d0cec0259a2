"""
Tests for the xlsx and csv exports.
"""
import io

import pandas as pd
from openpyxl import load_workbook

from testcase_ace.export.spreadsheet import (
    BILINGUAL_COLUMNS,
    RESULT_COLUMNS,
    TEST_CASE_COLUMNS,
    bilingual_to_csv,
    cases_to_csv,
    cases_to_xlsx,
    report_to_xlsx,
)
from testcase_ace.models import TestCase

BOM = b"\xef\xbb\xbf"


def _rows(content: bytes, sheet: str):
    workbook = load_workbook(io.BytesIO(content))
    return list(workbook[sheet].iter_rows(values_only=True)), workbook[sheet]


def test_empty_xlsx_has_only_headers():
    """
    Exporting no cases still produces the four header cells.
    """
    rows, _ = _rows(cases_to_xlsx([]), "Test Cases")
    assert rows == [tuple(TEST_CASE_COLUMNS)]


def test_xlsx_rows_and_widths(sample_cases):
    rows, sheet = _rows(cases_to_xlsx(sample_cases), "Test Cases")
    assert rows[0] == tuple(TEST_CASE_COLUMNS)
    assert rows[1][0] == "TC-001"
    assert rows[1][2] == sample_cases[0].steps_to_reproduce
    assert len(rows) == 3
    assert [sheet.column_dimensions[c].width for c in "ABCD"] == [15, 40, 60, 60]
    assert sheet["C2"].alignment.wrap_text is True


def test_empty_csv_has_bom_and_headers():
    content = cases_to_csv([])
    assert content.startswith(BOM)
    assert content.decode("utf-8-sig").splitlines() == [",".join(TEST_CASE_COLUMNS)]


def test_csv_keeps_japanese_text(japanese_cases):
    content = cases_to_csv(japanese_cases)
    frame = pd.read_csv(io.BytesIO(content), encoding="utf-8-sig")
    assert list(frame.columns) == TEST_CASE_COLUMNS
    assert frame.loc[0, "Preconditions"] == "ユーザーは認証済みです。"


def test_report_workbook_sheets(sample_report):
    """
    The report workbook has a Summary sheet and a Detailed Results sheet.
    """
    content = report_to_xlsx(sample_report)

    summary, summary_sheet = _rows(content, "Summary")
    assert summary[0] == ("API Endpoint", "https://api.example.com/users")
    assert summary[1] == ("API Method", "POST")
    assert summary[2] == ("Generated At", "2026-10-19 14:25:01")
    assert summary[3] == (None, None)
    assert summary[4:] == [("Total Tests", 2), ("Passed", 1), ("Failed", 0), ("Errors", 1)]
    assert summary_sheet.column_dimensions["A"].width == 15
    assert summary_sheet.column_dimensions["B"].width == 50

    details, details_sheet = _rows(content, "Detailed Results")
    assert details[0] == tuple(RESULT_COLUMNS)
    assert details[1][:2] == ("TC-001", "PASSED")
    assert details[2][:2] == ("TC-002", "ERROR")
    assert details[2][6] == "Failed to execute test. Error: connection refused"
    assert [details_sheet.column_dimensions[c].width for c in "ABCDEFG"] == [15, 10, 50, 40, 60, 60, 80]


def test_bilingual_csv_pads_shorter_side():
    content = bilingual_to_csv("line one\n\nline two\n", "行一")
    assert content.startswith(BOM)
    frame = pd.read_csv(io.BytesIO(content), encoding="utf-8-sig", keep_default_na=False)
    assert list(frame.columns) == BILINGUAL_COLUMNS
    assert frame.values.tolist() == [["line one", "行一"], ["line two", ""]]


def test_xlsx_keeps_formula_like_text_as_string(sample_report):
    """
    Cell text beginning with "=" is exported literally, not as a live formula.
    """
    case = TestCase(
        test_case_id="TC-EQ",
        preconditions="=1+1",
        steps_to_reproduce="1. Send the request.",
        expected_results='=HYPERLINK("http://x","ok")',
    )
    _, sheet = _rows(cases_to_xlsx([case]), "Test Cases")
    assert sheet["D2"].data_type == "s"
    assert sheet["D2"].value == '=HYPERLINK("http://x","ok")'
    assert sheet["B2"].data_type == "s"
    assert sheet["B2"].value == "=1+1"

    result = sample_report.results[0].model_copy(update={"actual_response": "=SUM(A1:A9)"})
    report = sample_report.model_copy(update={"results": [result, sample_report.results[1]]})
    _, details = _rows(report_to_xlsx(report), "Detailed Results")
    assert details["G2"].data_type == "s"
    assert details["G2"].value == "=SUM(A1:A9)"
